from __future__ import annotations

PEG_COUNT = 3
PEGS = (0, 1, 2)
START_PEG = 0
GOAL_PEG = 2

MIN_DISKS = 1
MAX_DISKS = 8
DEFAULT_DISKS = 3

def is_peg(p: object) -> bool:
    # bool is an int subclass; True/False are not peg indices
    return isinstance(p, int) and not isinstance(p, bool) and 0 <= p < PEG_COUNT

def other_peg(a: int, b: int) -> int:
    return 3 - a - b

def peg_name(p: int) -> str:
    return f"peg {p + 1}"

def minimal_moves(n: int) -> int:
    return (1 << n) - 1
