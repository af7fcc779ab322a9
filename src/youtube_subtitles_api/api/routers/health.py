"""Health check router."""

from fastapi import APIRouter, Depends

from youtube_subtitles.core import ProxyManager

from ...api.models.base import HealthResponse
from ...config import get_api_config
from ...dependencies import get_proxy_manager

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(proxy_manager: ProxyManager = Depends(get_proxy_manager)):
    """
    Health check endpoint.

    Returns:
        Health status with the current proxy pool size
    """
    return HealthResponse(
        status="ok",
        version=get_api_config().version,
        proxies=len(proxy_manager.pool),
    )
