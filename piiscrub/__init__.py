"""piiscrub — redact PII and credentials from text before it leaves the machine.

Module-level functions operate on the process-default ``ScrubberContext``.
Create a ``ScrubberContext`` directly for an isolated pattern set and stats.

    >>> import piiscrub
    >>> piiscrub.scrub("mail alice@example.com from 10.0.0.12")
    'mail [EMAIL] from [IP]'
"""

from __future__ import annotations

from typing import Any, Iterable

from piiscrub.constants import CATEGORY_CUSTOM, DEFAULT_CUSTOM_PRIORITY
from piiscrub.errors import ConfigError, HomoglyphError, ResidualLeakageError, ScrubError
from piiscrub.homoglyph import (
    check_mixed_script,
    detect_homoglyphs,
    ensure_no_mixed_script,
    get_homoglyph_map,
    normalize_homoglyphs,
)
from piiscrub.models.results import (
    AddPatternResult,
    PatternInfo,
    RemovePatternResult,
    StatsSnapshot,
    ValidationResult,
)
from piiscrub.patterns import BUILTIN_PATTERNS, PatternRegistry, ScrubPattern
from piiscrub.patterns.definitions import HintSpec
from piiscrub.scrubber import (
    ScopedScrubber,
    ScrubberContext,
    get_default_context,
    set_default_context,
    validate_scrubbed,
)

__version__ = "1.0.0"


def scrub(text: object) -> str:
    return get_default_context().scrub(text)


def scrub_value(value: Any) -> Any:
    return get_default_context().scrub_value(value)


def scrub_values(values: Any) -> list[Any]:
    return get_default_context().scrub_values(values)


def scrub_and_verify(text: object) -> str:
    return get_default_context().scrub_and_verify(text)


def add_custom_pattern(
    name: str,
    regex: Any,
    replacement: str,
    category: str = CATEGORY_CUSTOM,
    priority: int = DEFAULT_CUSTOM_PRIORITY,
    hint: HintSpec = None,
    case_sensitive: bool = True,
) -> AddPatternResult:
    return get_default_context().add_pattern(
        name,
        regex,
        replacement,
        category=category,
        priority=priority,
        hint=hint,
        case_sensitive=case_sensitive,
    )


def remove_custom_pattern(name: str) -> RemovePatternResult:
    return get_default_context().remove_pattern(name)


def list_patterns() -> list[PatternInfo]:
    return get_default_context().list_patterns()


def reset_patterns() -> None:
    get_default_context().reset_patterns()


def get_scrub_stats() -> StatsSnapshot:
    return get_default_context().get_stats()


def reset_stats() -> None:
    get_default_context().reset_stats()


def create_scoped_scrubber(categories: Iterable[str]) -> ScopedScrubber:
    return get_default_context().create_scoped_scrubber(categories)


__all__ = [
    "BUILTIN_PATTERNS",
    "AddPatternResult",
    "ConfigError",
    "HomoglyphError",
    "PatternInfo",
    "PatternRegistry",
    "RemovePatternResult",
    "ResidualLeakageError",
    "ScopedScrubber",
    "ScrubError",
    "ScrubPattern",
    "ScrubberContext",
    "StatsSnapshot",
    "ValidationResult",
    "add_custom_pattern",
    "check_mixed_script",
    "create_scoped_scrubber",
    "detect_homoglyphs",
    "ensure_no_mixed_script",
    "get_default_context",
    "get_homoglyph_map",
    "get_scrub_stats",
    "list_patterns",
    "normalize_homoglyphs",
    "remove_custom_pattern",
    "reset_patterns",
    "reset_stats",
    "scrub",
    "scrub_and_verify",
    "scrub_value",
    "scrub_values",
    "set_default_context",
    "validate_scrubbed",
]
