"""Progress events emitted by the subtitle processing pipeline."""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Union


@dataclass(frozen=True)
class ProgressEvent:
    """Intermediate progress report."""
    message: str
    progress: int
    total: int
    type: str = field(default="progress", init=False)

    terminal = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorEvent:
    """Terminal failure report."""
    error: str
    type: str = field(default="error", init=False)

    terminal = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CompleteEvent:
    """Terminal success report carrying the final SRT text."""
    srt: str
    type: str = field(default="complete", init=False)

    terminal = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


PipelineEvent = Union[ProgressEvent, ErrorEvent, CompleteEvent]
