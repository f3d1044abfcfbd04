from __future__ import annotations

from .game import Game
from .state import GameState
from .types import DEFAULT_DISKS, PEGS

def setup_standard(n: int = DEFAULT_DISKS) -> Game:
    return Game(GameState.new(n))

def ascii_board(state: GameState) -> str:
    n = state.disk_count
    width = 2 * n + 1
    rows = []
    for level in range(n - 1, -1, -1):
        row = []
        for p in PEGS:
            stack = state.pegs[p]
            if level < len(stack):
                d = stack[level]
                mark = "#" if state.selection is not None and state.selection.peg == p and level == len(stack) - 1 else "="
                row.append((mark * (2 * d - 1)).center(width))
            else:
                row.append("|".center(width))
        rows.append(" ".join(row).rstrip())
    rows.append(" ".join("-" * width for _ in PEGS))
    rows.append(" ".join(str(p + 1).center(width) for p in PEGS).rstrip())
    return "\n".join(rows)
