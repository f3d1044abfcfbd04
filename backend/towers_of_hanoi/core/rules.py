from __future__ import annotations

from typing import List, Tuple, TYPE_CHECKING

from .results import Reason, Result
from .types import PEGS, is_peg

if TYPE_CHECKING:
    from .state import GameState

def validate(state: "GameState", source: object, target: object) -> Result[int]:
    """Check one peg-to-peg move against the live position.

    Pure predicate: on success the value is the rank of the disk that would
    move. The first failing rule decides the reason.
    """
    if state.complete:
        return Result.failure(Reason.GAME_COMPLETE, "Game is already complete",
                              source=source, target=target)

    if not is_peg(source):
        return Result.failure(Reason.INVALID_PEG, f"Invalid source peg: {source!r}. Must be 0, 1, or 2",
                              role="source", source=source, target=target)
    if not is_peg(target):
        return Result.failure(Reason.INVALID_PEG, f"Invalid target peg: {target!r}. Must be 0, 1, or 2",
                              role="target", source=source, target=target)

    if source == target:
        return Result.failure(Reason.SAME_PEG, "Cannot move disk to the same peg",
                              source=source, target=target)

    disk = state.top(source)  # type: ignore[arg-type]
    if disk is None:
        return Result.failure(Reason.EMPTY_SOURCE, f"Cannot move from empty peg {source}",
                              source=source, target=target)

    on_target = state.top(target)  # type: ignore[arg-type]
    if on_target is not None and on_target <= disk:
        return Result.failure(Reason.SIZE_VIOLATION, f"Cannot place disk {disk} on smaller disk {on_target}",
                              source=source, target=target, disk=disk, target_top=on_target)

    return Result.success(disk)

def valid_destinations(state: "GameState", source: int) -> List[int]:
    return [t for t in PEGS if t != source and validate(state, source, t).ok]

def valid_moves(state: "GameState") -> List[Tuple[int, int]]:
    return [(s, t) for s in PEGS for t in valid_destinations(state, s)]
