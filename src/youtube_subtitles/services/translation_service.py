"""Service for batch translation of SRT subtitles."""

import asyncio
import re
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, Union

from ..core.config import config, TranslationConfig
from ..core.exceptions import TranslationError, TranslationRateLimitError, SubtitleParseError
from ..core.llm_manager import TranslationBackend
from ..models import SubtitleBlock, PipelineEvent, ProgressEvent, CompleteEvent
from ..utils.logging import get_logger
from ..utils.subtitle_utils import parse_srt_blocks, assemble_srt

logger = get_logger("translation_service")

MAX_LINES_PER_REQUEST = 50
LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class BackoffPolicy:
    """Fixed wait before a retry and how many retries are allowed."""
    cooldown: float
    max_retries: int


def clamp_lines_per_request(value: Union[int, str, None], upper: int = MAX_LINES_PER_REQUEST) -> int:
    """
    Coerce a lines-per-request value into [1, upper].

    Strings are read up to the first non-digit ("2.5" is 2); values with no
    leading integer become 1.
    """
    if isinstance(value, int):
        lines = value
    else:
        match = LEADING_INT.match(str(value)) if value is not None else None
        lines = int(match.group(1)) if match else 1
    return max(1, min(lines, upper))


def split_translated_lines(translated: str) -> List[str]:
    return [line.strip() for line in translated.split("\n")]


def reconcile_batch(lines: List[str], batch_size: int) -> List[str]:
    """
    Fit a batch's translated lines to the batch size.

    Extra lines are dropped and missing ones become empty strings, so every
    batch occupies exactly its own offsets in the translations list.
    """
    lines = lines[:batch_size]
    return lines + [""] * (batch_size - len(lines))


class SubtitleTranslationService:
    """
    Translates SRT text batch by batch.

    Batches run strictly in sequence: order must be preserved and the
    backend enforces per-minute limits. The pipeline is an async generator
    of progress events; closing it early stops further batches from being
    scheduled.
    """

    def __init__(
        self,
        backend: TranslationBackend,
        translation_config: Optional[TranslationConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.backend = backend
        self.config = translation_config or config.translation
        self._sleep = sleep
        self.backoff: Dict[Type[TranslationError], BackoffPolicy] = {
            TranslationRateLimitError: BackoffPolicy(
                cooldown=self.config.rate_limit_cooldown,
                max_retries=self.config.rate_limit_retries,
            ),
        }
        logger.info("Initialized SubtitleTranslationService")

    async def translate_batch(self, text: str, target_language: str, api_key: str, model: str) -> str:
        """Call the backend, applying the backoff table to classified errors."""
        retries: Dict[Type[TranslationError], int] = {}
        while True:
            try:
                return await self.backend.translate(text, target_language, api_key, model)
            except TranslationError as e:
                policy = self.backoff.get(type(e))
                used = retries.get(type(e), 0)
                if policy is None or used >= policy.max_retries:
                    raise
                retries[type(e)] = used + 1
                logger.warning(
                    f"{type(e).__name__}, waiting {policy.cooldown:g} seconds before retry "
                    f"({used + 1}/{policy.max_retries})"
                )
                await self._sleep(policy.cooldown)

    async def process(
        self,
        srt_text: str,
        target_language: Optional[str],
        api_key: str,
        model: str,
        lines_per_request: Union[int, str, None] = 1,
        download_only: bool = False
    ) -> AsyncIterator[PipelineEvent]:
        """
        Translate SRT text, yielding progress and finally a CompleteEvent.

        Args:
            srt_text: Full subtitle payload
            target_language: Language to translate into
            api_key: Backend API key
            model: Backend model identifier
            lines_per_request: Batch size, clamped to [1, 50]
            download_only: Skip translation and return the input unchanged

        Raises:
            SubtitleParseError: no subtitle blocks were recognized
            TranslationError: backend failure (rate limit after retry, bad key, ...)
        """
        if download_only:
            yield ProgressEvent(message="Preparing download without translation", progress=1, total=1)
            yield CompleteEvent(srt=srt_text)
            return

        blocks = parse_srt_blocks(srt_text)
        if not blocks:
            raise SubtitleParseError("Failed to parse subtitles for translation")

        batch_size = clamp_lines_per_request(lines_per_request, self.config.max_lines_per_request)
        total = len(blocks)
        translations: List[str] = []

        for start in range(0, total, batch_size):
            batch: List[SubtitleBlock] = blocks[start:start + batch_size]
            end = start + len(batch)
            payload = "\n".join(block.text.strip() for block in batch)

            yield ProgressEvent(
                message=f"Translating lines {start + 1} to {end} of {total}",
                progress=end,
                total=total,
            )

            translated = await self.translate_batch(payload, target_language, api_key, model)
            lines = split_translated_lines(translated)
            if len(lines) != len(batch):
                logger.warning(
                    f"Mismatch in translated lines for {start + 1}-{end}: "
                    f"expected {len(batch)}, got {len(lines)}"
                )
            translations.extend(reconcile_batch(lines, len(batch)))

            if end < total:
                logger.info(f"Waiting {self.config.inter_batch_delay:g} seconds before next translation batch")
                await self._sleep(self.config.inter_batch_delay)

        yield CompleteEvent(srt=assemble_srt(blocks, translations))
