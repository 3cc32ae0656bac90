"""Scoped scrubbers — a scrubber restricted to a fixed set of categories."""

from __future__ import annotations

from typing import Iterable

from piiscrub.patterns.definitions import ScrubPattern
from piiscrub.scrubber.engine import apply_patterns


class ScopedScrubber:
    """Applies only the patterns captured at construction time.

    The pattern tuple is a snapshot: patterns added to (or removed from) the
    originating registry afterwards are not picked up. Scoped scrubs do not
    update the context's statistics.
    """

    __slots__ = ("_categories", "_patterns")

    def __init__(self, categories: Iterable[str], patterns: Iterable[ScrubPattern]) -> None:
        self._categories = frozenset(categories)
        self._patterns: tuple[ScrubPattern, ...] = tuple(
            sorted(patterns, key=lambda p: p.priority)
        )

    @property
    def categories(self) -> frozenset[str]:
        return self._categories

    def __len__(self) -> int:
        return len(self._patterns)

    def scrub(self, text: object) -> str:
        """Scrub ``text`` with the scoped patterns only. Non-str / empty input → ``""``."""
        if not text or not isinstance(text, str):
            return ""
        return apply_patterns(text, self._patterns)
