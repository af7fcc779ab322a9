"""Data models for caption and subtitle information."""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Iterable, Tuple


@dataclass(frozen=True)
class CaptionEvent:
    """A single timed caption unit as returned by the caption source."""
    offset: float
    duration: float
    text: str

    @property
    def end(self) -> float:
        """Calculate end time."""
        return self.offset + self.duration

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CaptionEvent":
        return cls(
            offset=float(data["offset"]),
            duration=float(data["duration"]),
            text=str(data["text"]),
        )


# Chronological, immutable once produced
Transcript = Tuple[CaptionEvent, ...]


def build_transcript(
    raw_events: Iterable[Dict[str, Any]],
    default_duration: float = 5.0
) -> Transcript:
    """
    Build a Transcript from raw caption dicts.

    Accepts ``start`` or ``offset`` for the timestamp. Text is trimmed and
    events left empty by trimming are dropped. Missing or non-positive
    durations are replaced by ``default_duration``.
    """
    events: List[CaptionEvent] = []
    for raw in raw_events:
        text = (raw.get("text") or "").strip()
        if not text:
            continue
        offset = raw.get("offset", raw.get("start", 0.0)) or 0.0
        duration = raw.get("duration") or 0.0
        if duration <= 0:
            duration = default_duration
        events.append(CaptionEvent(offset=max(0.0, float(offset)), duration=float(duration), text=text))
    return tuple(events)


def transcript_to_dicts(transcript: Transcript) -> List[Dict[str, Any]]:
    """Serialize a transcript for caching."""
    return [event.to_dict() for event in transcript]


def transcript_from_dicts(data: Iterable[Dict[str, Any]]) -> Transcript:
    """Deserialize a cached transcript."""
    return tuple(CaptionEvent.from_dict(item) for item in data)


@dataclass
class SubtitleBlock:
    """
    One subtitle entry parsed from SRT text.

    ``time`` is the literal ``start --> end`` line and is never reformatted.
    """
    time: str
    text: str = ""

    def append_text(self, line: str) -> None:
        self.text = f"{self.text} {line}" if self.text else line
