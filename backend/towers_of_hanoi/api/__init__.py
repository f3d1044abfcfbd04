"""Stable backend boundary for a frontend.

Speaks only JSON-friendly structures:
- state snapshots
- command results as ``{"ok": ..., "result" | "error": ...}``
- before/after diffs suitable for animation
"""

from .facade import HanoiEngine, diff
from .serde import move_to_dict, intent_to_dict, result_to_dict, snapshot

__all__ = ["HanoiEngine", "diff", "move_to_dict", "intent_to_dict", "result_to_dict", "snapshot"]
