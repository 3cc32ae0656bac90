"""ScrubberContext — one pattern registry plus one statistics tracker.

The module-level API in ``piiscrub`` is bound to a process-default context
(``get_default_context()``). Independent contexts are cheap and isolated:
tests and multi-tenant hosts create their own.

Thread-safety:
    ``scrub()`` reads the registry's immutable sorted snapshot without locking.
    Registry mutations and stats increments take their own locks.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Iterable, Optional

from piiscrub.constants import CATEGORY_CUSTOM, DEFAULT_CUSTOM_PRIORITY
from piiscrub.models.results import (
    AddPatternResult,
    PatternInfo,
    RemovePatternResult,
    StatsSnapshot,
    ValidationResult,
)
from piiscrub.patterns.definitions import BUILTIN_PATTERNS, HintSpec, ScrubPattern
from piiscrub.patterns.loader import parse_custom_patterns
from piiscrub.patterns.registry import PatternRegistry
from piiscrub.scrubber import structure
from piiscrub.scrubber.engine import apply_input_cap, apply_patterns
from piiscrub.scrubber.scoped import ScopedScrubber
from piiscrub.scrubber.stats import ScrubStats
from piiscrub.scrubber.validator import ensure_clean, validate_scrubbed
from piiscrub.utils.logger import configure_logging, get_logger, log_duration

if TYPE_CHECKING:
    from piiscrub.config import Config

logger = get_logger(__name__)


class ScrubberContext:
    """Owns the active pattern set and redaction counters for one scrubber.

    Usage:
        ctx = ScrubberContext()
        ctx.scrub("contact alice@example.com")   # -> "contact [EMAIL]"
        ctx.get_stats().by_category               # -> {"personal": 1}
    """

    def __init__(
        self,
        builtin_patterns: Iterable[ScrubPattern] = BUILTIN_PATTERNS,
        input_hard_cap: Optional[int] = None,
    ) -> None:
        self.registry = PatternRegistry(builtin_patterns)
        self.stats = ScrubStats()
        self.input_hard_cap = input_hard_cap

    @classmethod
    def from_config(cls, config: "Config") -> "ScrubberContext":
        """Build a context with the configured input cap and custom patterns.

        Also applies ``config.logging`` through ``configure_logging()``.
        """
        configure_logging(config.logging.level, config.logging.json_output)
        ctx = cls(input_hard_cap=config.scrubber.input_hard_cap)
        for pattern in parse_custom_patterns(config.scrubber.custom_patterns):
            ctx.registry.register(pattern)
        logger.info(
            "Scrubber context configured",
            input_hard_cap=ctx.input_hard_cap,
            pattern_count=len(ctx.registry),
        )
        return ctx

    # ── Scrubbing ─────────────────────────────────────────────────────────────

    def scrub(self, text: object) -> str:
        """Redact sensitive data in ``text``.

        Non-str or empty input returns ``""``. NEVER raises, never returns None.
        """
        if not text or not isinstance(text, str):
            return ""
        text = apply_input_cap(text, self.input_hard_cap)
        return apply_patterns(text, self.registry.sorted_patterns, self.stats.record)

    def scrub_value(self, value: Any) -> Any:
        """Recursively scrub strings inside lists, tuples and mappings."""
        return structure.scrub_value(value, self.scrub)

    def scrub_values(self, values: Any) -> list[Any]:
        """Scrub each element of a list/tuple. Non-sequence input returns ``[]``."""
        with log_duration(logger, "scrub_values"):
            return structure.scrub_values(values, self.scrub)

    def scrub_and_verify(self, text: object) -> str:
        """Scrub, then raise ``ResidualLeakageError`` if residual PII remains."""
        scrubbed = self.scrub(text)
        ensure_clean(scrubbed)
        return scrubbed

    def validate(self, text: object) -> ValidationResult:
        return validate_scrubbed(text)

    # ── Registry ──────────────────────────────────────────────────────────────

    def add_pattern(
        self,
        name: str,
        regex: Any,
        replacement: str,
        category: str = CATEGORY_CUSTOM,
        priority: int = DEFAULT_CUSTOM_PRIORITY,
        hint: HintSpec = None,
        case_sensitive: bool = True,
    ) -> AddPatternResult:
        return self.registry.add_pattern(
            name,
            regex,
            replacement,
            category=category,
            priority=priority,
            hint=hint,
            case_sensitive=case_sensitive,
        )

    def remove_pattern(self, name: str) -> RemovePatternResult:
        return self.registry.remove_pattern(name)

    def list_patterns(self) -> list[PatternInfo]:
        return self.registry.list_patterns()

    def reset_patterns(self) -> None:
        self.registry.reset_patterns()

    def create_scoped_scrubber(self, categories: Iterable[str]) -> ScopedScrubber:
        """Snapshot the active patterns in ``categories`` into a ``ScopedScrubber``.

        A plain ``str`` is treated as a single category name.
        """
        if isinstance(categories, str):
            categories = [categories]
        category_set = frozenset(categories)
        return ScopedScrubber(category_set, self.registry.select(category_set))

    # ── Stats ─────────────────────────────────────────────────────────────────

    def get_stats(self) -> StatsSnapshot:
        return self.stats.snapshot(pattern_count=len(self.registry))

    def reset_stats(self) -> None:
        self.stats.reset()


# ─── Process default ──────────────────────────────────────────────────────────

_default_context: Optional[ScrubberContext] = None
_default_lock = threading.Lock()


def get_default_context() -> ScrubberContext:
    """Return the process-default context, creating it on first use."""
    global _default_context
    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = ScrubberContext()
    return _default_context


def set_default_context(ctx: ScrubberContext) -> None:
    """Replace the process-default context (e.g. one built with ``from_config``)."""
    global _default_context
    with _default_lock:
        _default_context = ctx
