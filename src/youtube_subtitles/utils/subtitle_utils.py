"""Utilities for SRT formatting and parsing."""

import re
from typing import List, Sequence

from ..models import SubtitleBlock, Transcript

TIME_RANGE_MARKER = "-->"
_NUMERIC_LINE = re.compile(r"^\d+$")


def format_srt_time(seconds: float) -> str:
    """
    Format seconds as an SRT timecode (HH:MM:SS,mmm).

    Seconds are rounded to whole milliseconds first so that values such as
    1.1 don't come out as 00:00:01,099.
    """
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def format_srt_entry(index: int, time_range: str, text: str) -> str:
    return f"{index}\n{time_range}\n{text}\n"


def transcript_to_srt(transcript: Transcript) -> str:
    """
    Render a transcript as SRT text.

    Each event becomes one numbered entry; entries are separated by a blank line.
    """
    entries = []
    for i, event in enumerate(transcript, 1):
        time_range = f"{format_srt_time(event.offset)} {TIME_RANGE_MARKER} {format_srt_time(event.end)}"
        entries.append(format_srt_entry(i, time_range, event.text.strip()))
    return "\n".join(entries)


def parse_srt_blocks(srt_text: str) -> List[SubtitleBlock]:
    """
    Parse SRT text into subtitle blocks.

    A line containing ``-->`` opens a block, following non-blank lines that
    aren't purely numeric are joined into its text, and a blank line commits
    it. A block still open at the end of input is committed too.
    """
    blocks: List[SubtitleBlock] = []
    current = None

    for raw_line in srt_text.splitlines():
        line = raw_line.strip()
        if TIME_RANGE_MARKER in raw_line:
            current = SubtitleBlock(time=raw_line)
        elif line and current is not None and not _NUMERIC_LINE.match(line):
            current.append_text(line)
        elif not line and current is not None:
            blocks.append(current)
            current = None

    if current is not None:
        blocks.append(current)
    return blocks


def assemble_srt(blocks: Sequence[SubtitleBlock], translations: Sequence[str]) -> str:
    """
    Pair each block's time line with its translation.

    Empty or missing translations fall back to the block's original text.
    """
    entries = []
    for i, block in enumerate(blocks):
        translated = translations[i] if i < len(translations) else ""
        entries.append(format_srt_entry(i + 1, block.time, translated or block.text.strip()))
    return "\n".join(entries)
