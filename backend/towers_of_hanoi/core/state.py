from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .moves import Move, Selection
from .types import GOAL_PEG, MAX_DISKS, MIN_DISKS, PEG_COUNT, START_PEG, minimal_moves

Pegs = Tuple[Tuple[int, ...], ...]

def check_disk_count(n: object) -> int:
    if not isinstance(n, int) or isinstance(n, bool) or not (MIN_DISKS <= n <= MAX_DISKS):
        raise ValueError(f"Number of disks must be an integer between {MIN_DISKS} and {MAX_DISKS}")
    return n

def is_solved(pegs: Sequence[Sequence[int]], n: int) -> bool:
    return list(pegs[GOAL_PEG]) == list(range(n, 0, -1))

@dataclass
class GameState:
    """The single mutable aggregate of a game session.

    Only ``core.game.Game`` mutates it. Everything else reads ``pegs_snapshot()``
    or ``clone()``.
    """
    disk_count: int
    pegs: List[List[int]]
    selection: Optional[Selection] = None
    move_count: int = 0
    history: List[Move] = field(default_factory=list)
    complete: bool = False
    optimal_move_count: int = 0

    # wall-clock bookkeeping, not part of equality
    started_at: float = field(default_factory=time.time, compare=False)
    last_move_at: Optional[float] = field(default=None, compare=False)
    completed_at: Optional[float] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.optimal_move_count:
            self.optimal_move_count = minimal_moves(self.disk_count)

    @classmethod
    def new(cls, n: int) -> "GameState":
        check_disk_count(n)
        pegs: List[List[int]] = [[] for _ in range(PEG_COUNT)]
        pegs[START_PEG] = list(range(n, 0, -1))
        return cls(disk_count=n, pegs=pegs)

    @classmethod
    def from_pegs(cls, pegs: Sequence[Sequence[int]]) -> "GameState":
        """Build a mid-game position with an empty history.

        Raises ValueError if the pegs break the stacking or ownership rules.
        """
        if len(pegs) != PEG_COUNT:
            raise ValueError(f"Expected {PEG_COUNT} pegs, got {len(pegs)}")
        n = sum(len(p) for p in pegs)
        check_disk_count(n)
        st = cls(disk_count=n, pegs=[list(p) for p in pegs])
        st.validate()
        st.complete = is_solved(st.pegs, n)
        if st.complete:
            st.completed_at = st.started_at
        return st

    # --- queries ---
    def top(self, peg: int) -> Optional[int]:
        stack = self.pegs[peg]
        return stack[-1] if stack else None

    def peg_of(self, disk: int) -> int:
        for i, stack in enumerate(self.pegs):
            if disk in stack:
                return i
        raise ValueError(f"Disk {disk} not found")

    def pegs_snapshot(self) -> Pegs:
        return tuple(tuple(p) for p in self.pegs)

    def is_won(self) -> bool:
        return is_solved(self.pegs, self.disk_count)

    # --- integrity ---
    def validate(self) -> None:
        if len(self.pegs) != PEG_COUNT:
            raise ValueError(f"Game state must have exactly {PEG_COUNT} pegs")

        for i, stack in enumerate(self.pegs):
            for below, above in zip(stack, stack[1:]):
                if above >= below:
                    raise ValueError(f"Invalid disk ordering on peg {i}: disks must be in descending order")

        ranks = [d for stack in self.pegs for d in stack]
        if len(ranks) != self.disk_count:
            raise ValueError(f"Expected {self.disk_count} disks, found {len(ranks)}")
        if len(set(ranks)) != len(ranks):
            raise ValueError("Duplicate disks found in game state")
        for r in range(1, self.disk_count + 1):
            if r not in ranks:
                raise ValueError(f"Missing disk {r}")

        if self.move_count < 0:
            raise ValueError("Invalid move count")
        if len(self.history) != self.move_count:
            raise ValueError("Move history length does not match move count")
        for i, m in enumerate(self.history, start=1):
            if m.sequence_number != i:
                raise ValueError(f"Move {i} has sequence number {m.sequence_number}")

    def clone(self) -> "GameState":
        return GameState(
            disk_count=self.disk_count,
            pegs=[list(p) for p in self.pegs],
            selection=self.selection,
            move_count=self.move_count,
            history=list(self.history),
            complete=self.complete,
            optimal_move_count=self.optimal_move_count,
            started_at=self.started_at,
            last_move_at=self.last_move_at,
            completed_at=self.completed_at,
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "pegs": [list(p) for p in self.pegs],
            "move_count": self.move_count,
            "complete": self.complete,
            "selected_disk": None if self.selection is None else self.selection.disk,
            "selected_peg": None if self.selection is None else self.selection.peg,
            "disk_count": self.disk_count,
            "optimal_move_count": self.optimal_move_count,
        }
