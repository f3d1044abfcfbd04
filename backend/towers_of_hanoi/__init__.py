"""Towers of Hanoi (backend).

- core: board state, move validation, move executor, events
- solver: optimal move sequences from any legal position
- sequencer: paced asyncio auto-solve with pause/resume/stop
- api: stable JSON-oriented facade for UIs
- formats/tools: position strings, statistics and achievements
"""

from . import core, api
from .position import initial_position, parse_position, position_of
from .solver import optimal_sequence, moves_remaining, next_hint
from .sequencer import AutoSolver, SequencerState, Outcome
from .stats import game_stats, analyze_performance, earned_achievements, format_game_time

__all__ = [
    "core","api",
    "initial_position","parse_position","position_of",
    "optimal_sequence","moves_remaining","next_hint",
    "AutoSolver","SequencerState","Outcome",
    "game_stats","analyze_performance","earned_achievements","format_game_time",
]
