"""Paced auto-solve on top of the move executor.

The sequencer plans once with the solver, then plays the plan one move at a
time on the live Game. Between moves it suspends until both the configured
delay has elapsed and the animation of the previous move has settled. Moves
themselves are synchronous, so pause/stop only ever take effect between moves.

    solver = AutoSolver(game, animator=renderer.animate)
    solver.start(speed_ms=300, on_step=print)
    ...
    solver.pause()
    solver.resume()
    outcome = await solver.wait()
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from .core import Game, Move, MoveIntent, MoveResult, Reason, Rejection, Result
from .solver import optimal_sequence

LOGGER = logging.getLogger("hanoi.sequencer")

MIN_SPEED_MS = 100

# animator(move) returns an awaitable that resolves once the move is drawn,
# or None when there is nothing to wait for
Animator = Callable[[Move], Optional[Awaitable[Any]]]


def default_speed_ms() -> int:
    return int(os.environ.get("HANOI_SOLVE_SPEED_MS", "500"))


class SequencerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Outcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ABORTED = "aborted"


@dataclass
class Callbacks:
    on_step: Optional[Callable[[MoveResult, int, int], None]] = None
    on_complete: Optional[Callable[[], None]] = None
    on_pause: Optional[Callable[[], None]] = None
    on_resume: Optional[Callable[[], None]] = None
    on_abort: Optional[Callable[[Rejection], None]] = None


class AutoSolver:
    def __init__(self, game: Game, animator: Optional[Animator] = None, *, min_speed_ms: int = MIN_SPEED_MS) -> None:
        self.game = game
        self.animator = animator
        self.min_speed_ms = min_speed_ms
        self.speed_ms = max(min_speed_ms, default_speed_ms())

        self.state = SequencerState.IDLE
        self.outcome: Optional[Outcome] = None
        self.error: Optional[Rejection] = None

        self._plan: List[MoveIntent] = []
        self._step = 0
        self._expected: Optional[Tuple[Any, int]] = None
        self._callbacks = Callbacks()
        self._task: Optional[asyncio.Task] = None
        self._settled: Optional[asyncio.Future] = None
        self._done: Optional[asyncio.Future] = None

    # --- queries ---
    @property
    def is_running(self) -> bool:
        return self.state is SequencerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state is SequencerState.PAUSED

    def progress(self) -> Dict[str, Any]:
        total = len(self._plan)
        return {
            "state": self.state.value,
            "step": self._step,
            "total": total,
            "percent": (self._step / total * 100.0) if total else 0.0,
            "outcome": None if self.outcome is None else self.outcome.value,
            "speed_ms": self.speed_ms,
        }

    def set_speed(self, speed_ms: int) -> None:
        self.speed_ms = max(self.min_speed_ms, int(speed_ms))

    # --- commands ---
    def start(
        self,
        speed_ms: Optional[int] = None,
        *,
        on_step: Optional[Callable[[MoveResult, int, int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_pause: Optional[Callable[[], None]] = None,
        on_resume: Optional[Callable[[], None]] = None,
        on_abort: Optional[Callable[[Rejection], None]] = None,
    ) -> Result[Dict[str, Any]]:
        """Plan from the live position and play the first move right away.

        Must be called with a running event loop.
        """
        if self.state is not SequencerState.IDLE:
            return Result.failure(Reason.SEQUENCER_BUSY, "Auto-solve is already running", state=self.state.value)

        loop = asyncio.get_running_loop()
        if speed_ms is not None:
            self.set_speed(speed_ms)
        self._callbacks = Callbacks(on_step, on_complete, on_pause, on_resume, on_abort)
        self._plan = optimal_sequence(self.game.state)
        self._step = 0
        self.outcome = None
        self.error = None
        self._settled = None
        self._done = loop.create_future()

        LOGGER.info("autosolve_started", extra={"total": len(self._plan), "speed_ms": self.speed_ms})
        if not self._plan:
            self._finish(Outcome.COMPLETED)
            return Result.success(self.progress())

        self.state = SequencerState.RUNNING
        self._expected = self._fingerprint()
        if not self._step_once() and self.error is not None:
            return Result(rejection=self.error)
        if self.state is SequencerState.RUNNING:
            self._task = loop.create_task(self._drive(delay=True))
        return Result.success(self.progress())

    def pause(self) -> Result[Dict[str, Any]]:
        if self.state is not SequencerState.RUNNING:
            return Result.failure(Reason.SEQUENCER_NOT_RUNNING, "Auto-solve is not running", state=self.state.value)
        self.state = SequencerState.PAUSED
        self._cancel_task()
        LOGGER.info("autosolve_paused", extra={"step": self._step})
        self._call("on_pause", self._callbacks.on_pause)
        return Result.success(self.progress())

    def resume(self) -> Result[Dict[str, Any]]:
        if self.state is not SequencerState.PAUSED:
            return Result.failure(Reason.SEQUENCER_NOT_PAUSED, "Auto-solve is not paused", state=self.state.value)
        loop = asyncio.get_running_loop()
        self.state = SequencerState.RUNNING
        LOGGER.info("autosolve_resumed", extra={"step": self._step})
        self._call("on_resume", self._callbacks.on_resume)
        # on_resume may have paused or stopped again
        if self.state is SequencerState.RUNNING:
            self._task = loop.create_task(self._drive(delay=False))
        return Result.success(self.progress())

    def stop(self) -> Result[Dict[str, Any]]:
        if self.state is not SequencerState.IDLE:
            self._cancel_task()
            self._finish(Outcome.CANCELLED)
        return Result.success(self.progress())

    async def wait(self) -> Optional[Outcome]:
        if self._done is None:
            return self.outcome
        return await asyncio.shield(self._done)

    # --- internals ---
    def _fingerprint(self) -> Tuple[Any, int]:
        st = self.game.state
        return st.pegs_snapshot(), st.move_count

    def _call(self, name: str, fn: Optional[Callable[..., None]], *args: Any) -> bool:
        """Run a caller-supplied callback; False if it raised."""
        if fn is None:
            return True
        try:
            fn(*args)
        except Exception:
            LOGGER.exception("autosolve_callback_failed", extra={"callback": name, "step": self._step})
            return False
        return True

    def _animate(self, move: Move) -> Optional[asyncio.Future]:
        if self.animator is None:
            return None
        try:
            aw = self.animator(move)
            return None if aw is None else asyncio.ensure_future(aw)
        except Exception:
            LOGGER.exception("autosolve_animation_failed", extra={"step": self._step})
            return None

    def _signal(self, move: Move) -> asyncio.Future:
        fut = self._animate(move)
        if fut is None:
            fut = asyncio.get_running_loop().create_future()
            fut.set_result(None)
        return fut

    def _execute(self, intent: MoveIntent) -> Optional[Result[MoveResult]]:
        # listeners run inside execute; the move may already be applied when one raises
        try:
            return self.game.execute(intent.source, intent.target)
        except Exception:
            LOGGER.exception("autosolve_step_failed", extra={"step": self._step, "disk": intent.disk})
            return None

    def _step_once(self) -> bool:
        if self._fingerprint() != self._expected:
            self._abort(Reason.SEQUENCER_STATE_MISMATCH, "Game state changed during auto-solve", step=self._step)
            return False

        intent = self._plan[self._step]
        res = self._execute(intent)
        if res is None:
            self._abort(Reason.SEQUENCER_CALLBACK_FAILED, "Game listener failed during auto-solve", step=self._step)
            return False
        if not res.ok:
            rej = res.rejection
            self._abort(
                Reason.SEQUENCER_STATE_MISMATCH,
                f"Auto-solve move rejected: {rej.message}",  # type: ignore[union-attr]
                step=self._step,
                cause=rej.reason.value,  # type: ignore[union-attr]
            )
            return False

        self._step += 1
        self._expected = self._fingerprint()
        self._settled = self._signal(res.value.move)  # type: ignore[union-attr]
        LOGGER.debug("autosolve_step", extra={"step": self._step, "total": len(self._plan), "disk": intent.disk})
        if not self._call("on_step", self._callbacks.on_step, res.value, self._step, len(self._plan)):
            # on_step may have stopped us before raising
            if self.state is not SequencerState.IDLE:
                self._abort(Reason.SEQUENCER_CALLBACK_FAILED, "on_step callback failed", step=self._step)
            return False
        return True

    async def _wait_tick(self, delay: bool) -> None:
        settled = self._settled
        waits: List[asyncio.Future] = []
        if delay:
            waits.append(asyncio.ensure_future(asyncio.sleep(self.speed_ms / 1000.0)))
        if settled is not None and not settled.done():
            # shielded: pausing cancels our wait, never the animation itself
            waits.append(asyncio.shield(settled))
        if waits:
            try:
                await asyncio.wait(waits)
            except asyncio.CancelledError:
                for w in waits:
                    w.cancel()
                raise

        if settled is not None and settled.done() and not settled.cancelled():
            exc = settled.exception()
            if exc is not None:
                LOGGER.warning("autosolve_animation_failed", extra={"step": self._step, "error": str(exc)})

    async def _drive(self, delay: bool) -> None:
        while self.state is SequencerState.RUNNING:
            await self._wait_tick(delay)
            delay = True
            if self.state is not SequencerState.RUNNING:
                return
            if self._step >= len(self._plan):
                self._finish(Outcome.COMPLETED)
                return
            if not self._step_once():
                return

    def _cancel_task(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _abort(self, reason: Reason, message: str, **details: Any) -> None:
        self.error = Rejection(reason, message, details)
        LOGGER.warning("autosolve_aborted", extra={"reason": reason.value, "detail": message, **details})
        self._cancel_task()
        self._finish(Outcome.ABORTED)
        self._call("on_abort", self._callbacks.on_abort, self.error)

    def _finish(self, outcome: Outcome) -> None:
        self.state = SequencerState.IDLE
        self.outcome = outcome
        self._task = None
        if self._done is not None and not self._done.done():
            self._done.set_result(outcome)
        LOGGER.info("autosolve_finished", extra={"outcome": outcome.value, "step": self._step})
        if outcome is Outcome.COMPLETED:
            self._call("on_complete", self._callbacks.on_complete)
