from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .core import DEFAULT_DISKS, Game, GameState, MoveResult, ascii_board
from .position import parse_position, position_of
from .sequencer import AutoSolver, Outcome, default_speed_ms
from .solver import next_hint, optimal_sequence
from .stats import analyze_performance, earned_achievements, game_stats


def _load(args: argparse.Namespace) -> Optional[GameState]:
    try:
        if args.position:
            return parse_position(args.position)
        return GameState.new(args.disks)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return None


def _print_summary(st: GameState) -> None:
    s = game_stats(st)
    perf = analyze_performance(s)
    print(f"Solved in {s.move_count} moves (optimal {s.optimal_move_count}), "
          f"efficiency {s.efficiency}%, grade {perf.grade}, time {s.elapsed_formatted}")
    for a in earned_achievements(s):
        print(f"  * {a.name}: {a.description}")


def cmd_show(args: argparse.Namespace) -> int:
    st = _load(args)
    if st is None:
        return 2
    print(ascii_board(st))
    print()
    print(position_of(st))
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    st = _load(args)
    if st is None:
        return 2
    seq = optimal_sequence(st)
    for i, m in enumerate(seq, start=1):
        print(f"{i}. disk {m.disk}: peg {m.source + 1} -> peg {m.target + 1}")
    print(f"Total: {len(seq)}")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    st = _load(args)
    if st is None:
        return 2
    g = Game(st)

    while True:
        print(ascii_board(g.state))
        print()
        if g.state.complete:
            _print_summary(g.state)
            return 0

        line = input("Move (<from> <to>, pegs 1-3), u=undo, h=hint, q=quit: ").strip().lower()
        if line in ("q", "quit", "exit"):
            return 0
        if line in ("u", "undo"):
            res = g.undo()
        elif line in ("h", "hint"):
            hint = next_hint(g.state)
            if hint is not None:
                print(f"Hint: disk {hint.disk}: peg {hint.source + 1} -> peg {hint.target + 1}")
            continue
        else:
            parts = line.split()
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                print("Enter two peg numbers, e.g. 1 3")
                continue
            res = g.execute(int(parts[0]) - 1, int(parts[1]) - 1)

        if res.ok:
            print(res.value.describe())  # type: ignore[union-attr]
        else:
            print("Rejected:", res.rejection.message)  # type: ignore[union-attr]


async def _auto(st: GameState, speed_ms: int) -> int:
    g = Game(st)

    def on_step(r: MoveResult, step: int, total: int) -> None:
        print(f"[{step}/{total}] {r.describe()}")
        print(ascii_board(g.state))
        print()

    solver = AutoSolver(g)
    res = solver.start(speed_ms, on_step=on_step)
    if not res.ok:
        print("Rejected:", res.rejection.message)  # type: ignore[union-attr]
        return 1
    outcome = await solver.wait()
    if g.state.complete:
        _print_summary(g.state)
    return 0 if outcome is Outcome.COMPLETED else 1


def cmd_auto(args: argparse.Namespace) -> int:
    st = _load(args)
    if st is None:
        return 2
    print(ascii_board(st))
    print()
    return asyncio.run(_auto(st, args.speed))


def _add_position_args(p: argparse.ArgumentParser) -> None:
    grp = p.add_mutually_exclusive_group()
    grp.add_argument("--disks", type=int, default=DEFAULT_DISKS)
    grp.add_argument("--position", type=str, default=None, help='e.g. "3,2/1/"')


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="hanoi")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = ap.add_subparsers(dest="cmd", required=True)

    ss = sub.add_parser("show", help="Show ASCII pegs and position string")
    _add_position_args(ss)
    ss.set_defaults(fn=cmd_show)

    so = sub.add_parser("solve", help="Print the optimal move sequence")
    _add_position_args(so)
    so.set_defaults(fn=cmd_solve)

    pl = sub.add_parser("play", help="Play in the console")
    _add_position_args(pl)
    pl.set_defaults(fn=cmd_play)

    au = sub.add_parser("auto", help="Watch the paced auto-solver")
    _add_position_args(au)
    au.add_argument("--speed", type=int, default=default_speed_ms(), help="milliseconds between moves (env HANOI_SOLVE_SPEED_MS)")
    au.set_defaults(fn=cmd_auto)

    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s %(message)s")
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
