from __future__ import annotations

from typing import List

from .core import GameState, PEG_COUNT, check_disk_count


def initial_position(n: int) -> str:
    check_disk_count(n)
    return ",".join(str(d) for d in range(n, 0, -1)) + "//"


def parse_position(text: str) -> GameState:
    """Parse a position string into a fresh GameState (empty history).

    Format: three pegs separated by '/', ranks bottom-to-top separated by ','.
    "3,2/1/" is disks 3 and 2 on the first peg and disk 1 on the second.
    """
    fields = text.strip().split("/")
    if len(fields) != PEG_COUNT:
        raise ValueError(f"Position must have {PEG_COUNT} pegs separated by '/'")

    pegs: List[List[int]] = []
    for i, field in enumerate(fields):
        field = field.strip()
        stack: List[int] = []
        if field:
            for tok in field.split(","):
                tok = tok.strip()
                if not tok.isdigit():
                    raise ValueError(f"Bad disk rank on peg {i}: {tok!r}")
                stack.append(int(tok))
        pegs.append(stack)

    return GameState.from_pegs(pegs)


def position_of(state: GameState) -> str:
    return "/".join(",".join(str(d) for d in stack) for stack in state.pegs)
