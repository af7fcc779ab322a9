"""Subtitle request and response models for the API."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FetchSubtitlesRequest(BaseModel):
    """Caption fetch request model."""

    model_config = ConfigDict(populate_by_name=True)

    # Optional so a missing URL reaches the handler and gets its own message
    url: Optional[str] = Field(default=None, description="YouTube video URL")
    language_code: Optional[str] = Field(
        default=None,
        alias="languageCode",
        description="Caption language; the first available track when omitted"
    )
    use_proxy: bool = Field(default=False, alias="useProxy", description="Route the fetch through proxies")
    custom_proxies: Optional[List[str]] = Field(
        default=None,
        alias="customProxies",
        description="Proxy endpoints to use instead of the public list"
    )


class FetchSubtitlesResponse(BaseModel):
    """Caption fetch response model."""

    srt: str = Field(..., description="Captions in SRT format")
