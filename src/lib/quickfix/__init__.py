"""Local rule-based quick fixes."""
from __future__ import annotations

from .rules import DEFAULT_RULES, QuickFixRule, apply_quick_fixes, trace_quick_fixes

__all__ = [
    "DEFAULT_RULES",
    "QuickFixRule",
    "apply_quick_fixes",
    "trace_quick_fixes",
]
