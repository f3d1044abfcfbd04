from __future__ import annotations

import asyncio
from pathlib import Path
import sys

# Ensure `backend/` is on sys.path so `import towers_of_hanoi` works.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

from towers_of_hanoi.core import Game, GameCompleted, Listener, ascii_board, setup_standard
from towers_of_hanoi.position import parse_position, position_of
from towers_of_hanoi.sequencer import AutoSolver
from towers_of_hanoi.solver import moves_remaining, next_hint
from towers_of_hanoi.stats import analyze_performance, earned_achievements, game_stats


class AchievementPrinter(Listener):
    def on_event(self, game: Game, event: object) -> None:
        if isinstance(event, GameCompleted):
            s = game_stats(game.state)
            print(f"Completed in {event.move_count} moves ({'optimal' if event.optimal else 'not optimal'}),"
                  f" grade {analyze_performance(s).grade}")
            for a in earned_achievements(s):
                print("  achievement:", a.name)


def show(title: str, game: Game) -> None:
    print("\n" + "=" * 72)
    print(title)
    print(ascii_board(game.state))
    print("Position:", position_of(game.state), "| moves:", game.state.move_count,
          "| to goal:", moves_remaining(game.state))


def demo_manual_play_and_rejections() -> None:
    g = setup_standard(3)
    show("Demo 1: manual play, a rejected move, and undo", g)

    print("select peg 1:", g.select(0).value)
    print("move selected to peg 2:", g.move_selected_to(1).value.describe())
    res = g.execute(0, 1)
    print("disk 2 onto disk 1:", res.reason.value, "-", res.rejection.message)
    print("undo:", g.undo().value.describe())
    show("After undo", g)


def demo_hint_from_mid_game() -> None:
    g = Game(parse_position("3,2/1/"))
    g.listeners.append(AchievementPrinter())
    show("Demo 2: follow hints from a mid-game position", g)
    while not g.state.complete:
        hint = next_hint(g.state)
        print("hint:", g.apply_intent(hint).value.describe())
    show("Solved", g)


async def demo_paced_auto_solve() -> None:
    g = setup_standard(4)
    g.listeners.append(AchievementPrinter())
    solver = AutoSolver(g)
    show("Demo 3: paced auto-solve with a pause in the middle", g)

    def on_step(r, step, total):
        print(f"[{step}/{total}] {r.describe()}")
        if step == 5:
            solver.pause()

    solver.start(100, on_step=on_step, on_pause=lambda: print("-- paused --"),
                 on_resume=lambda: print("-- resumed --"))
    await asyncio.sleep(0.5)
    solver.resume()
    print("outcome:", (await solver.wait()).value)
    show("After auto-solve", g)


if __name__ == "__main__":
    demo_manual_play_and_rejections()
    demo_hint_from_mid_game()
    asyncio.run(demo_paced_auto_solve())
