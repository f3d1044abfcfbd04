from .types import PEG_COUNT, PEGS, START_PEG, GOAL_PEG, MIN_DISKS, MAX_DISKS, DEFAULT_DISKS, is_peg, other_peg, peg_name, minimal_moves
from .results import Reason, Rejection, Result
from .moves import Move, MoveIntent, MoveResult, Selection
from .state import GameState, check_disk_count, is_solved
from .events import MoveApplied, MoveUndone, SelectionChanged, GameCompleted
from .rules import validate, valid_destinations, valid_moves
from .game import Game, Listener
from .setup import setup_standard, ascii_board

__all__ = [
    "PEG_COUNT","PEGS","START_PEG","GOAL_PEG","MIN_DISKS","MAX_DISKS","DEFAULT_DISKS",
    "is_peg","other_peg","peg_name","minimal_moves",
    "Reason","Rejection","Result",
    "Move","MoveIntent","MoveResult","Selection",
    "GameState","check_disk_count","is_solved",
    "MoveApplied","MoveUndone","SelectionChanged","GameCompleted",
    "validate","valid_destinations","valid_moves",
    "Game","Listener",
    "setup_standard","ascii_board",
]
