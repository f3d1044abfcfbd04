from __future__ import annotations

from typing import Any, Dict, Optional

from ..core import GameState, Move, MoveIntent, MoveResult, Rejection, Result, Selection, peg_name
from ..position import position_of
from ..solver import moves_remaining


def intent_to_dict(i: MoveIntent) -> Dict[str, Any]:
    return {
        "source": i.source,
        "target": i.target,
        "disk": i.disk,
        "source_name": peg_name(i.source),
        "target_name": peg_name(i.target),
    }


def move_to_dict(m: Move) -> Dict[str, Any]:
    d = intent_to_dict(m.intent())
    d["sequence_number"] = m.sequence_number
    d["timestamp"] = m.timestamp
    return d


def selection_to_dict(s: Optional[Selection]) -> Optional[Dict[str, Any]]:
    if s is None:
        return None
    return {"disk": s.disk, "peg": s.peg}


def move_result_to_dict(r: MoveResult) -> Dict[str, Any]:
    return {
        "move": move_to_dict(r.move),
        "disk": r.disk,
        "source": r.source,
        "target": r.target,
        "completed": r.completed,
        "undone": r.undone,
        "description": r.describe(),
    }


def rejection_to_dict(rej: Rejection) -> Dict[str, Any]:
    return {"reason": rej.reason.value, "message": rej.message, "details": dict(rej.details)}


def _value_to_json(v: Any) -> Any:
    if isinstance(v, MoveResult):
        return move_result_to_dict(v)
    if isinstance(v, Move):
        return move_to_dict(v)
    if isinstance(v, MoveIntent):
        return intent_to_dict(v)
    if isinstance(v, Selection):
        return selection_to_dict(v)
    if isinstance(v, (list, tuple)):
        return [_value_to_json(x) for x in v]
    if isinstance(v, dict):
        return {k: _value_to_json(x) for k, x in v.items()}
    return v


def result_to_dict(res: Result) -> Dict[str, Any]:
    """Render a command Result as ``{"ok": True, "result": ...}`` or ``{"ok": False, "error": ...}``."""
    if res.ok:
        return {"ok": True, "result": _value_to_json(res.value)}
    return {"ok": False, "error": rejection_to_dict(res.rejection)}  # type: ignore[arg-type]


def snapshot(state: GameState) -> Dict[str, Any]:
    """JSON-friendly, read-only view of a game for renderers."""
    out: Dict[str, Any] = {
        "disk_count": state.disk_count,
        "pegs": [list(p) for p in state.pegs],
        "position": position_of(state),
        "selection": selection_to_dict(state.selection),
        "move_count": state.move_count,
        "optimal_move_count": state.optimal_move_count,
        "moves_to_goal": moves_remaining(state),
        "complete": state.complete,
        "last_move": move_to_dict(state.history[-1]) if state.history else None,
        "started_at": state.started_at,
        "completed_at": state.completed_at,
    }
    return out
