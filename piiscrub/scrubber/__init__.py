"""piiscrub scrubber package.

Public API:
    ScrubberContext        — registry + stats; the unit every scrub call runs against
    get_default_context()  — process-default context used by the module-level API
    ScopedScrubber         — category-restricted snapshot scrubber
    validate_scrubbed()    — residual-leakage checks on already-scrubbed text
"""
from piiscrub.scrubber.context import ScrubberContext, get_default_context, set_default_context
from piiscrub.scrubber.scoped import ScopedScrubber
from piiscrub.scrubber.validator import ensure_clean, validate_scrubbed

__all__ = [
    "ScopedScrubber",
    "ScrubberContext",
    "ensure_clean",
    "get_default_context",
    "set_default_context",
    "validate_scrubbed",
]
