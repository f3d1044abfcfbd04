from __future__ import annotations

from dataclasses import dataclass, field

@dataclass(frozen=True)
class MoveIntent:
    """A peg-to-peg move that has not been applied yet (solver output)."""
    source: int
    target: int
    disk: int

@dataclass(frozen=True)
class Move:
    source: int
    target: int
    disk: int
    sequence_number: int
    # wall clock, excluded from equality so execute+undo round-trips compare equal
    timestamp: float = field(default=0.0, compare=False)

    def intent(self) -> MoveIntent:
        return MoveIntent(self.source, self.target, self.disk)

    def inverse(self) -> MoveIntent:
        return MoveIntent(self.target, self.source, self.disk)

@dataclass(frozen=True)
class Selection:
    disk: int
    peg: int

@dataclass(frozen=True)
class MoveResult:
    move: Move
    completed: bool = False
    undone: bool = False

    @property
    def disk(self) -> int:
        return self.move.disk

    @property
    def source(self) -> int:
        # for an undo, the disk travels target -> source of the recorded move
        return self.move.target if self.undone else self.move.source

    @property
    def target(self) -> int:
        return self.move.source if self.undone else self.move.target

    def describe(self) -> str:
        return f"disk {self.disk}: peg {self.source + 1} -> peg {self.target + 1}"
