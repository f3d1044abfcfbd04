from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .moves import Move, Selection

@dataclass(frozen=True)
class MoveApplied:
    move: "Move"
    completed: bool

@dataclass(frozen=True)
class MoveUndone:
    move: "Move"

@dataclass(frozen=True)
class SelectionChanged:
    selection: Optional["Selection"]
    previous: Optional["Selection"]

@dataclass(frozen=True)
class GameCompleted:
    """Emitted once, on the move that solves the puzzle.

    Carries what an achievement/history store needs; the core persists nothing.
    """
    disk_count: int
    move_count: int
    optimal_move_count: int
    elapsed: float

    @property
    def optimal(self) -> bool:
        return self.move_count == self.optimal_move_count
