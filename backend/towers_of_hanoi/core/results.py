from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class Reason(Enum):
    # move validation
    INVALID_PEG = "INVALID_PEG"
    SAME_PEG = "SAME_PEG"
    EMPTY_SOURCE = "EMPTY_SOURCE"
    SIZE_VIOLATION = "SIZE_VIOLATION"
    GAME_COMPLETE = "GAME_COMPLETE"

    # executor
    NO_HISTORY = "NO_HISTORY"
    GAME_ALREADY_COMPLETE = "GAME_ALREADY_COMPLETE"
    NO_SELECTION = "NO_SELECTION"
    EMPTY_PEG = "EMPTY_PEG"
    NO_VALID_DESTINATION = "NO_VALID_DESTINATION"

    # command surface
    INVALID_DISK_COUNT = "INVALID_DISK_COUNT"
    INVALID_POSITION = "INVALID_POSITION"

    # auto-solve
    SEQUENCER_BUSY = "SEQUENCER_BUSY"
    SEQUENCER_NOT_RUNNING = "SEQUENCER_NOT_RUNNING"
    SEQUENCER_NOT_PAUSED = "SEQUENCER_NOT_PAUSED"
    SEQUENCER_STATE_MISMATCH = "SEQUENCER_STATE_MISMATCH"
    SEQUENCER_CALLBACK_FAILED = "SEQUENCER_CALLBACK_FAILED"


@dataclass(frozen=True)
class Rejection:
    reason: Reason
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a command: either a value or a rejection, never both.

    Commands never raise for rule violations; callers branch on ``ok``.
    """
    value: Optional[T] = None
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @property
    def reason(self) -> Optional[Reason]:
        return None if self.rejection is None else self.rejection.reason

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: Reason, message: str, **details: Any) -> "Result[T]":
        return cls(rejection=Rejection(reason=reason, message=message, details=details))
