"""Gemini translation backend built on LangChain."""

import hashlib
from typing import Optional, Dict, Any, Protocol
from dataclasses import dataclass

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ..utils.logging import get_logger
from .config import config
from .exceptions import TranslationError, TranslationRateLimitError, InvalidApiKeyError

logger = get_logger("llm_manager")

TRANSLATION_PROMPT = """Translate the following subtitle text into {target_language} while maintaining:
- Natural, conversational tone
- Proper grammar and sentence structure
- Contextual accuracy
- Consistent terminology
- Appropriate length for on-screen display

Avoid:
- Literal translations
- Overly formal or bookish language
- Unnatural phrasing
- Excessive wordiness

Each input line is one subtitle. Return exactly one translated line per input line, in the same order.
Return ONLY the translated text, and nothing else. Do not include any introductory text. Do not include any numbering.

Input Text:
{text}"""

_RATE_LIMIT_MARKERS = ("429", "resource_exhausted", "resourceexhausted", "rate limit", "quota")
_INVALID_KEY_MARKERS = ("api key", "api_key_invalid", "permission_denied")


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    model: str
    temperature: float = config.translation.temperature
    timeout: int = config.translation.timeout
    max_retries: int = config.translation.backend_max_retries


class TranslationBackend(Protocol):
    """Anything that can translate a newline-separated subtitle payload."""

    async def translate(self, text: str, target_language: str, api_key: str, model: str) -> str:
        ...


def _status_code(error: Exception) -> Optional[int]:
    for attr in ("code", "status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None


def classify_error(error: Exception) -> TranslationError:
    """Map a client library exception onto the translation error taxonomy."""
    status = _status_code(error)
    message = str(error)
    lowered = f"{type(error).__name__} {message}".lower()

    if status == 429 or any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
        return TranslationRateLimitError(message or "Rate limit exceeded")
    if status in (401, 403) or any(marker in lowered for marker in _INVALID_KEY_MARKERS):
        return InvalidApiKeyError(message or "Invalid API key")
    return TranslationError(message or type(error).__name__)


class LLMManager:
    """Creates and caches Gemini chat models per (model, api key) pair."""

    def __init__(self):
        self._llm_cache: Dict[str, Any] = {}

    def _get_cache_key(self, llm_config: LLMConfig, api_key: str) -> str:
        """Generate cache key for LLM instance; the key itself is never stored in clear."""
        key_digest = hashlib.sha256(api_key.encode()).hexdigest()[:16]
        return f"{llm_config.model}_{llm_config.temperature}_{key_digest}"

    def get_chat_model(self, llm_config: LLMConfig, api_key: str) -> Any:
        """Get a LangChain Gemini chat model."""
        cache_key = self._get_cache_key(llm_config, api_key)
        if cache_key in self._llm_cache:
            return self._llm_cache[cache_key]

        logger.info(f"Creating Gemini LLM: {llm_config.model} (temp: {llm_config.temperature})")
        llm = ChatGoogleGenerativeAI(
            model=llm_config.model,
            temperature=llm_config.temperature,
            timeout=llm_config.timeout,
            max_retries=llm_config.max_retries,
            google_api_key=api_key,
        )
        self._llm_cache[cache_key] = llm
        return llm

    async def translate(self, text: str, target_language: str, api_key: str, model: str) -> str:
        """
        Translate a subtitle payload.

        Raises:
            TranslationRateLimitError: backend returned 429
            InvalidApiKeyError: backend rejected the credentials
            TranslationError: any other backend failure
        """
        llm = self.get_chat_model(LLMConfig(model=model), api_key)
        prompt = TRANSLATION_PROMPT.format(target_language=target_language, text=text)
        try:
            response = await llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise classify_error(e) from e

        content = response.content
        if isinstance(content, list):
            # Newer Gemini models may return content parts
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return content.strip()

    def clear_cache(self) -> None:
        """Clear LLM cache."""
        logger.info(f"Clearing LLM cache ({len(self._llm_cache)} instances)")
        self._llm_cache.clear()
