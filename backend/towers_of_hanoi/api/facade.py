from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core import DEFAULT_DISKS, Game, GameState, Listener, MoveIntent, Reason, Result, Selection
from ..position import parse_position
from ..sequencer import Animator, AutoSolver
from ..solver import next_hint, optimal_sequence
from ..stats import analyze_performance, earned_achievements, game_stats
from .serde import snapshot

LOGGER = logging.getLogger("hanoi.api.facade")


def _disk_pegs(snap: Dict[str, Any]) -> Dict[int, int]:
    out: Dict[int, int] = {}
    for p, stack in enumerate(snap.get("pegs", [])):
        for d in stack:
            out[int(d)] = p
    return out


def diff(before: Dict[str, Any], after: Dict[str, Any]) -> Dict[str, Any]:
    """Compute an animation-friendly diff between two snapshots."""
    b = _disk_pegs(before)
    a = _disk_pegs(after)

    moved: List[Dict[str, Any]] = []
    for disk in sorted(a.keys() & b.keys()):
        if b[disk] != a[disk]:
            moved.append({"disk": disk, "from": b[disk], "to": a[disk]})

    return {
        "moved": moved,
        "selection_before": before.get("selection"),
        "selection_after": after.get("selection"),
        "move_count": after.get("move_count"),
        "complete": after.get("complete"),
        "just_completed": bool(after.get("complete")) and not before.get("complete"),
        "last_move": after.get("last_move"),
    }


class HanoiEngine:
    """A small, stable facade for UI/server integration.

    - every command returns a Result; rule violations never raise
    - state-changing commands carry before/after snapshots and a diff for animation
    - the Game and AutoSolver are built here and passed around, never global
    """

    def __init__(
        self,
        disks: int = DEFAULT_DISKS,
        *,
        animator: Optional[Animator] = None,
        allow_undo_after_complete: bool = False,
        solver_factory: Callable[..., AutoSolver] = AutoSolver,
    ) -> None:
        self.game = Game.new(disks, allow_undo_after_complete=allow_undo_after_complete)
        self.sequencer = solver_factory(self.game, animator)

    def subscribe(self, listener: Listener) -> None:
        self.game.listeners.append(listener)

    # --- lifecycle ---
    def _load(self, st: GameState) -> Dict[str, Any]:
        self.sequencer.stop()
        self.game.load(st)
        LOGGER.info("engine_game_loaded", extra={"disk_count": st.disk_count, "complete": st.complete})
        return snapshot(st)

    def new_game(self, n: object = DEFAULT_DISKS) -> Result[Dict[str, Any]]:
        try:
            st = GameState.new(n)  # type: ignore[arg-type]
        except ValueError as exc:
            return Result.failure(Reason.INVALID_DISK_COUNT, str(exc), disks=n)
        return Result.success(self._load(st))

    def load_position(self, text: str) -> Result[Dict[str, Any]]:
        try:
            st = parse_position(text)
        except ValueError as exc:
            return Result.failure(Reason.INVALID_POSITION, str(exc), position=text)
        return Result.success(self._load(st))

    def reset(self) -> Result[Dict[str, Any]]:
        return Result.success(self._load(GameState.new(self.game.state.disk_count)))

    # --- queries ---
    def state(self) -> Result[Dict[str, Any]]:
        out = snapshot(self.game.state)
        out["autosolve"] = self.sequencer.progress()
        return Result.success(out)

    def stats(self) -> Result[Dict[str, Any]]:
        s = game_stats(self.game.state)
        out = s.to_dict()
        perf = analyze_performance(s)
        out["performance"] = {"level": perf.level, "grade": perf.grade} if s.complete else None
        out["achievements"] = [
            {"id": a.id, "name": a.name, "description": a.description} for a in earned_achievements(s)
        ]
        return Result.success(out)

    def hint(self) -> Result[MoveIntent]:
        intent = next_hint(self.game.state)
        if intent is None:
            return Result.failure(Reason.GAME_COMPLETE, "Puzzle is already solved")
        return Result.success(intent)

    def solution(self) -> Result[List[MoveIntent]]:
        return Result.success(optimal_sequence(self.game.state))

    def valid_destinations(self, peg: int) -> Result[List[int]]:
        return Result.success(self.game.valid_destinations(peg))

    # --- manual play ---
    def _manual(self, fn: Callable[..., Result], *args: Any) -> Result[Dict[str, Any]]:
        if self.sequencer.is_running:
            return Result.failure(Reason.SEQUENCER_BUSY, "Auto-solve is running; pause or stop it first")
        before = snapshot(self.game.state)
        res = fn(*args)
        if not res.ok:
            return res
        after = snapshot(self.game.state)
        return Result.success({"applied": res.value, "before": before, "after": after, "diff": diff(before, after)})

    def select_peg(self, peg: int) -> Result[Selection]:
        if self.sequencer.is_running:
            return Result.failure(Reason.SEQUENCER_BUSY, "Auto-solve is running; pause or stop it first")
        return self.game.select(peg)

    def clear_selection(self) -> Result[Optional[Selection]]:
        return self.game.clear_selection()

    def move_selected_to(self, peg: int) -> Result[Dict[str, Any]]:
        return self._manual(self.game.move_selected_to, peg)

    def move(self, source: int, target: int) -> Result[Dict[str, Any]]:
        return self._manual(self.game.execute, source, target)

    def auto_move(self, peg: int) -> Result[Dict[str, Any]]:
        return self._manual(self.game.auto_move, peg)

    def undo(self) -> Result[Dict[str, Any]]:
        return self._manual(self.game.undo)

    # --- auto-solve ---
    def start_solve(self, speed_ms: Optional[int] = None, **callbacks: Any) -> Result[Dict[str, Any]]:
        """Start paced auto-solve from the current position. Needs a running event loop."""
        return self.sequencer.start(speed_ms, **callbacks)

    def pause(self) -> Result[Dict[str, Any]]:
        return self.sequencer.pause()

    def resume(self) -> Result[Dict[str, Any]]:
        return self.sequencer.resume()

    def stop_solve(self) -> Result[Dict[str, Any]]:
        return self.sequencer.stop()
