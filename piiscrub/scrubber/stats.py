"""Scrub statistics tracker.

Counters are monotonically incremented once per pattern that changed the text
and are reset independently of the pattern registry.
"""

from __future__ import annotations

import threading

from piiscrub.models.results import StatsSnapshot
from piiscrub.patterns.definitions import ScrubPattern


class ScrubStats:
    """Thread-safe redaction counters: total, per category, per pattern name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total = 0
        self._by_category: dict[str, int] = {}
        self._by_pattern: dict[str, int] = {}

    def record(self, pattern: ScrubPattern) -> None:
        with self._lock:
            self._total += 1
            self._by_category[pattern.category] = self._by_category.get(pattern.category, 0) + 1
            self._by_pattern[pattern.name] = self._by_pattern.get(pattern.name, 0) + 1

    @property
    def total_scrubs(self) -> int:
        return self._total

    def snapshot(self, pattern_count: int = 0) -> StatsSnapshot:
        """Return a copy of the counters; the caller may mutate it freely."""
        with self._lock:
            return StatsSnapshot(
                total_scrubs=self._total,
                by_category=dict(self._by_category),
                by_pattern=dict(self._by_pattern),
                pattern_count=pattern_count,
            )

    def reset(self) -> None:
        with self._lock:
            self._total = 0
            self._by_category = {}
            self._by_pattern = {}
