"""Post-game statistics, grading and achievements.

Nothing here is stored: an achievement store is a collaborator that listens
for ``GameCompleted`` and keeps whatever it wants.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .core import GameState


@dataclass(frozen=True)
class GameStats:
    disk_count: int
    move_count: int
    optimal_move_count: int
    efficiency: int
    complete: bool
    elapsed: float
    elapsed_formatted: str
    moves_remaining: int
    is_optimal: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Performance:
    level: str
    grade: str
    efficiency: int
    is_optimal: bool


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str


def format_game_time(seconds: float) -> str:
    whole = int(seconds)
    minutes, secs = divmod(whole, 60)
    if minutes > 0:
        return f"{minutes}:{secs:02d}"
    return f"{secs}s"


def game_stats(state: GameState, now: Optional[float] = None) -> GameStats:
    optimal = state.optimal_move_count
    moves = state.move_count
    # efficiency is relative to the full-game optimum, as the original scoreboard showed it
    efficiency = round(optimal / moves * 100) if moves > 0 else 100

    if state.complete and state.completed_at is not None:
        elapsed = state.completed_at - state.started_at
    else:
        elapsed = (time.time() if now is None else now) - state.started_at
    elapsed = max(0.0, elapsed)

    return GameStats(
        disk_count=state.disk_count,
        move_count=moves,
        optimal_move_count=optimal,
        efficiency=efficiency,
        complete=state.complete,
        elapsed=elapsed,
        elapsed_formatted=format_game_time(elapsed),
        moves_remaining=max(0, optimal - moves),
        is_optimal=state.complete and moves == optimal,
    )


def analyze_performance(stats: GameStats) -> Performance:
    if stats.is_optimal:
        level, grade = "perfect", "A+"
    elif stats.efficiency >= 80:
        level, grade = "excellent", "A"
    elif stats.efficiency >= 60:
        level, grade = "good", "B"
    else:
        level, grade = "needs_work", "C"
    return Performance(level=level, grade=grade, efficiency=stats.efficiency, is_optimal=stats.is_optimal)


_ACHIEVEMENTS: List[Tuple[Achievement, Callable[[GameStats], bool]]] = [
    (Achievement("perfect", "Perfect Solution!", "Solved with optimal number of moves"),
     lambda s: s.is_optimal),
    (Achievement("speed", "Speed Demon", "Solved in under 30 seconds"),
     lambda s: s.elapsed < 30),
    (Achievement("efficient", "Efficient Player", "Achieved 80% efficiency or better"),
     lambda s: s.efficiency >= 80),
    (Achievement("persistent", "Never Give Up", "Solved with more than double optimal moves"),
     lambda s: s.move_count > s.optimal_move_count * 2),
]


def earned_achievements(stats: GameStats) -> List[Achievement]:
    if not stats.complete:
        return []
    return [a for a, cond in _ACHIEVEMENTS if cond(stats)]
