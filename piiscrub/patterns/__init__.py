"""piiscrub patterns package.

Public API:
    ScrubPattern      — single compiled scrub rule (frozen dataclass)
    BUILTIN_PATTERNS  — the built-in rule table, compiled at import
    PatternRegistry   — ordered active rule set with a priority-sorted snapshot
"""
from piiscrub.patterns.definitions import BUILTIN_PATTERNS, ScrubPattern
from piiscrub.patterns.registry import PatternRegistry

__all__ = ["BUILTIN_PATTERNS", "PatternRegistry", "ScrubPattern"]
