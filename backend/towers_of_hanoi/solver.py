from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

from .core import GameState, MoveIntent, GOAL_PEG, other_peg, minimal_moves

PegsLike = Union[GameState, Sequence[Sequence[int]]]


def _positions(pegs: PegsLike) -> Dict[int, int]:
    stacks = pegs.pegs if isinstance(pegs, GameState) else pegs
    pos: Dict[int, int] = {}
    for p, stack in enumerate(stacks):
        for d in stack:
            pos[d] = p
    return pos


def optimal_sequence(pegs: PegsLike, goal: int = GOAL_PEG) -> List[MoveIntent]:
    """Shortest legal move list from the current configuration to all disks on `goal`.

    The recursion works on the real disk locations, so it resumes mid-game:
    to bring disks 1..k onto peg t, a disk k already on t is left alone;
    otherwise 1..k-1 are first gathered on the third peg, k moves to t, and
    1..k-1 follow. Once gathered, the sub-tower is in textbook shape and the
    second half is the classic 2**(k-1) - 1 transfer.
    """
    pos = _positions(pegs)
    out: List[MoveIntent] = []

    def gather(k: int, target: int) -> None:
        if k == 0:
            return
        src = pos[k]
        if src == target:
            gather(k - 1, target)
            return
        aux = other_peg(src, target)
        gather(k - 1, aux)
        out.append(MoveIntent(src, target, k))
        pos[k] = target
        gather(k - 1, target)

    gather(len(pos), goal)
    return out


def moves_remaining(pegs: PegsLike, goal: int = GOAL_PEG) -> int:
    """Length of optimal_sequence() without building it."""
    pos = _positions(pegs)

    def count(k: int, target: int) -> int:
        if k == 0:
            return 0
        if pos[k] == target:
            return count(k - 1, target)
        return count(k - 1, other_peg(pos[k], target)) + 1 + minimal_moves(k - 1)

    return count(len(pos), goal)


def next_hint(pegs: PegsLike, goal: int = GOAL_PEG) -> Optional[MoveIntent]:
    seq = optimal_sequence(pegs, goal)
    return seq[0] if seq else None


__all__ = ["minimal_moves", "optimal_sequence", "moves_remaining", "next_hint"]
