from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple

from .events import GameCompleted, MoveApplied, MoveUndone, SelectionChanged
from .moves import Move, MoveIntent, MoveResult, Selection
from .results import Reason, Result
from .rules import valid_destinations, valid_moves, validate
from .state import GameState
from .types import GOAL_PEG, is_peg

LOGGER = logging.getLogger("hanoi.core.game")

class Listener:
    def on_event(self, game: "Game", event: object) -> None:
        return

class Game:
    """Move executor: the only writer of a GameState.

    Every public mutator validates first and either applies fully or returns a
    rejection with the state untouched.
    """

    def __init__(
        self,
        state: GameState,
        *,
        allow_undo_after_complete: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = state
        self.allow_undo_after_complete = allow_undo_after_complete
        self.clock = clock
        self.listeners: List[Listener] = []

    @classmethod
    def new(cls, n: int, **kwargs) -> "Game":
        return cls(GameState.new(n), **kwargs)

    def emit(self, event: object) -> None:
        for sys in list(self.listeners):
            sys.on_event(self, event)

    def load(self, state: GameState) -> None:
        """Swap in a fresh position; listeners stay attached."""
        state.validate()
        self.state = state
        LOGGER.info("game_loaded", extra={"disk_count": state.disk_count, "complete": state.complete})

    # --- moves ---
    def validate(self, source: object, target: object) -> Result[int]:
        return validate(self.state, source, target)

    def execute(self, source: int, target: int) -> Result[MoveResult]:
        checked = validate(self.state, source, target)
        if not checked.ok:
            return checked  # type: ignore[return-value]

        st = self.state
        now = self.clock()
        disk = st.pegs[source].pop()
        st.pegs[target].append(disk)
        st.move_count += 1
        move = Move(source, target, disk, st.move_count, timestamp=now)
        st.history.append(move)
        st.last_move_at = now
        prev_selection = st.selection
        st.selection = None

        completed = False
        if st.is_won() and not st.complete:
            st.complete = True
            st.completed_at = now
            completed = True

        LOGGER.debug("move_applied", extra={"disk": disk, "source": source, "target": target, "move_count": st.move_count})
        if prev_selection is not None:
            self.emit(SelectionChanged(selection=None, previous=prev_selection))
        self.emit(MoveApplied(move=move, completed=completed))
        if completed:
            elapsed = now - st.started_at
            LOGGER.info("game_completed", extra={"disk_count": st.disk_count, "move_count": st.move_count})
            self.emit(GameCompleted(
                disk_count=st.disk_count,
                move_count=st.move_count,
                optimal_move_count=st.optimal_move_count,
                elapsed=elapsed,
            ))
        return Result.success(MoveResult(move=move, completed=completed))

    def undo(self) -> Result[MoveResult]:
        st = self.state
        if not st.history:
            return Result.failure(Reason.NO_HISTORY, "No moves to undo", move_count=st.move_count)
        if st.complete and not self.allow_undo_after_complete:
            return Result.failure(Reason.GAME_ALREADY_COMPLETE, "Cannot undo moves after game is complete")

        move = st.history.pop()
        back = move.inverse()
        disk = st.pegs[back.source].pop()
        st.pegs[back.target].append(disk)
        st.move_count -= 1
        st.last_move_at = st.history[-1].timestamp if st.history else None
        prev_selection = st.selection
        st.selection = None
        if st.complete:
            st.complete = False
            st.completed_at = None

        LOGGER.debug("move_undone", extra={"disk": disk, "move_count": st.move_count})
        if prev_selection is not None:
            self.emit(SelectionChanged(selection=None, previous=prev_selection))
        self.emit(MoveUndone(move=move))
        return Result.success(MoveResult(move=move, undone=True))

    def apply_intent(self, intent: MoveIntent) -> Result[MoveResult]:
        return self.execute(intent.source, intent.target)

    # --- selection ---
    def select(self, peg: int) -> Result[Selection]:
        if not is_peg(peg):
            return Result.failure(Reason.INVALID_PEG, f"Invalid peg index: {peg!r}", role="source", peg=peg)
        disk = self.state.top(peg)
        if disk is None:
            return Result.failure(Reason.EMPTY_PEG, f"Cannot select disk from empty peg {peg}", peg=peg)

        prev = self.state.selection
        sel = Selection(disk=disk, peg=peg)
        self.state.selection = sel
        self.emit(SelectionChanged(selection=sel, previous=prev))
        return Result.success(sel)

    def clear_selection(self) -> Result[Optional[Selection]]:
        prev = self.state.selection
        self.state.selection = None
        if prev is not None:
            self.emit(SelectionChanged(selection=None, previous=prev))
        return Result.success(prev)

    def move_selected_to(self, target: int) -> Result[MoveResult]:
        sel = self.state.selection
        if sel is None:
            return Result.failure(Reason.NO_SELECTION, "No disk is currently selected")
        return self.execute(sel.peg, target)

    # --- destinations ---
    def valid_destinations(self, source: int) -> List[int]:
        return valid_destinations(self.state, source)

    def valid_moves(self) -> List[Tuple[int, int]]:
        return valid_moves(self.state)

    def preferred_destination(self, source: int) -> Optional[int]:
        """Tie-break for one-gesture moves: the goal peg when legal, else the lowest legal peg."""
        dests = self.valid_destinations(source)
        if not dests:
            return None
        if GOAL_PEG in dests:
            return GOAL_PEG
        return dests[0]

    def auto_move(self, source: int) -> Result[MoveResult]:
        if self.state.complete:
            return Result.failure(Reason.GAME_COMPLETE, "Game is already complete", source=source)
        if not is_peg(source):
            return Result.failure(Reason.INVALID_PEG, f"Invalid source peg: {source!r}. Must be 0, 1, or 2", role="source", source=source)
        if self.state.top(source) is None:
            return Result.failure(Reason.EMPTY_SOURCE, f"No disk to move on peg {source}", source=source)
        dest = self.preferred_destination(source)
        if dest is None:
            return Result.failure(Reason.NO_VALID_DESTINATION, f"No valid moves for the disk on peg {source}", source=source)
        return self.execute(source, dest)

    # --- dry runs ---
    def validate_sequence(self, intents: Iterable[MoveIntent]) -> Result[int]:
        """Replay intents on a scratch copy. Value is the number of moves checked."""
        scratch = Game(self.state.clone())
        count = 0
        for i, intent in enumerate(intents):
            res = scratch.execute(intent.source, intent.target)
            if not res.ok:
                rej = res.rejection
                return Result.failure(rej.reason, f"Invalid move at index {i}: {rej.message}", index=i, **rej.details)  # type: ignore[union-attr]
            count += 1
        return Result.success(count)
