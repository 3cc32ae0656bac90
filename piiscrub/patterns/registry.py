"""Pattern registry — the active, ordered set of scrub rules.

Holds the built-in rules plus any runtime-added custom rules and maintains a
priority-sorted snapshot for the scrub hot path.

Thread-safety:
    Mutations (add / remove / reset) acquire ``self._lock``. The sorted view is
    an immutable tuple rebuilt on mutation and swapped in with a single
    attribute assignment, so readers (``sorted_patterns``) never lock and never
    observe a half-built list.
"""

from __future__ import annotations

import threading
from typing import Any, Iterable, Optional

from piiscrub.constants import CATEGORY_CUSTOM, DEFAULT_CUSTOM_PRIORITY
from piiscrub.errors import E_INVALID_PATTERN
from piiscrub.models.results import AddPatternResult, PatternInfo, RemovePatternResult
from piiscrub.patterns.definitions import (
    BUILTIN_PATTERNS,
    RE2_PATTERN_TYPE,
    HintSpec,
    ScrubPattern,
)
from piiscrub.utils.logger import get_logger

logger = get_logger(__name__)


def _sort_by_priority(patterns: Iterable[ScrubPattern]) -> tuple[ScrubPattern, ...]:
    # sorted() is stable: equal priorities keep registration order.
    return tuple(sorted(patterns, key=lambda p: p.priority))


class PatternRegistry:
    """Ordered set of named scrub rules with a cached priority-sorted view.

    Usage:
        registry = PatternRegistry()
        registry.add_pattern("employee_id", re2.compile(r"EMP-\\d{6}"), "[EMPLOYEE_ID]")
        for pattern in registry.sorted_patterns:
            ...

    INVARIANTS:
      - ``name`` is unique among active patterns; adding an existing name replaces it.
      - ``sorted_patterns`` is ascending by priority, ties in registration order.
      - ``reset_patterns()`` restores exactly ``builtin_patterns`` in original order,
        regardless of prior removals.
    """

    def __init__(self, builtin_patterns: Iterable[ScrubPattern] = BUILTIN_PATTERNS) -> None:
        self._builtins: tuple[ScrubPattern, ...] = tuple(builtin_patterns)
        self._lock = threading.Lock()
        self._active: list[ScrubPattern] = list(self._builtins)
        self._sorted: tuple[ScrubPattern, ...] = _sort_by_priority(self._active)

    # ── Read API (lock-free) ──────────────────────────────────────────────────

    @property
    def sorted_patterns(self) -> tuple[ScrubPattern, ...]:
        """Active patterns in application order. Immutable snapshot."""
        return self._sorted

    @property
    def builtin_patterns(self) -> tuple[ScrubPattern, ...]:
        return self._builtins

    def __len__(self) -> int:
        return len(self._sorted)

    def __contains__(self, name: object) -> bool:
        return any(p.name == name for p in self._sorted)

    def get(self, name: str) -> Optional[ScrubPattern]:
        for pattern in self._sorted:
            if pattern.name == name:
                return pattern
        return None

    def list_patterns(self) -> list[PatternInfo]:
        """Return ``PatternInfo`` for every active pattern, ascending by priority."""
        return [PatternInfo(p.name, p.category, p.priority) for p in self._sorted]

    # ── Mutation API ──────────────────────────────────────────────────────────

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
        """Register (or replace) a pattern.

        NEVER raises. Invalid arguments produce ``AddPatternResult(added=False)``
        with an ``E402`` error string:
          - ``name`` empty or not a str
          - ``regex`` not a compiled re2 pattern (pattern strings are rejected —
            compile with ``re2.compile()`` first)
          - ``replacement`` not a str
          - ``category`` empty or not a str
          - ``priority`` not a non-negative int
          - ``hint`` not None / str / sequence of non-empty str

        On success, any pattern with the same name is removed first, the new
        pattern is appended, and the sorted snapshot is rebuilt.
        """
        error = _validate_pattern_args(name, regex, replacement, category, priority)
        pattern: Optional[ScrubPattern] = None
        if error is None:
            try:
                pattern = ScrubPattern(
                    name=name,
                    category=category,
                    regex=regex,
                    replacement=replacement,
                    priority=priority,
                    hint=hint,
                    case_sensitive=bool(case_sensitive),
                )
            except (TypeError, ValueError) as exc:
                error = f"invalid hint: {exc}"

        if pattern is None:
            logger.warning("Rejected scrub pattern", name=repr(name), reason=error)
            return AddPatternResult(name=name, added=False, error=f"{E_INVALID_PATTERN}: {error}")

        with self._lock:
            replaced = any(p.name == name for p in self._active)
            self._active = [p for p in self._active if p.name != name]
            self._active.append(pattern)
            self._rebuild()

        logger.debug(
            "Scrub pattern registered",
            name=name,
            category=category,
            priority=priority,
            replaced=replaced,
        )
        return AddPatternResult(name=name, added=True)

    def register(self, pattern: ScrubPattern) -> AddPatternResult:
        """Register an already-built ``ScrubPattern`` (e.g. from the YAML loader)."""
        return self.add_pattern(
            pattern.name,
            pattern.regex,
            pattern.replacement,
            category=pattern.category,
            priority=pattern.priority,
            hint=pattern.hint,
            case_sensitive=pattern.case_sensitive,
        )

    def remove_pattern(self, name: str) -> RemovePatternResult:
        """Remove the pattern called ``name`` if present. Built-ins may be removed too;
        ``reset_patterns()`` brings them back."""
        with self._lock:
            before = len(self._active)
            self._active = [p for p in self._active if p.name != name]
            removed = len(self._active) < before
            if removed:
                self._rebuild()

        if removed:
            logger.debug("Scrub pattern removed", name=name)
        return RemovePatternResult(name=name, removed=removed)

    def reset_patterns(self) -> None:
        """Discard all custom patterns and restore the built-in table."""
        with self._lock:
            self._active = list(self._builtins)
            self._rebuild()
        logger.debug("Scrub patterns reset to built-ins", count=len(self._builtins))

    def select(self, categories: Iterable[str]) -> tuple[ScrubPattern, ...]:
        """Priority-sorted snapshot of the active patterns in ``categories``."""
        category_set = frozenset(categories)
        return tuple(p for p in self._sorted if p.category in category_set)

    # ── Internal ──────────────────────────────────────────────────────────────

    def _rebuild(self) -> None:
        # Caller holds self._lock.
        self._sorted = _sort_by_priority(self._active)


def _validate_pattern_args(
    name: object,
    regex: object,
    replacement: object,
    category: object,
    priority: object,
) -> Optional[str]:
    """Return a human-readable reason when the arguments are invalid, else None."""
    if not name or not isinstance(name, str):
        return "name must be a non-empty string"
    if not isinstance(regex, RE2_PATTERN_TYPE):
        return f"regex must be a compiled re2 pattern, got {type(regex).__name__}"
    if not isinstance(replacement, str):
        return f"replacement must be a string, got {type(replacement).__name__}"
    if not category or not isinstance(category, str):
        return "category must be a non-empty string"
    if isinstance(priority, bool) or not isinstance(priority, int) or priority < 0:
        return f"priority must be a non-negative integer, got {priority!r}"
    return None
