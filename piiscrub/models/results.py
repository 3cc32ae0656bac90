"""Result types returned by the public piiscrub API.

All types are frozen dataclasses. Mutable fields (dicts / lists) hold fresh
copies built for each call, so callers may mutate them freely without touching
engine state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AddPatternResult:
    """Outcome of ``add_pattern()``.

    Fields:
        name:  The name the caller asked to register.
        added: True if the pattern is now active.
        error: Error code (``E402``) plus reason when ``added`` is False.
    """

    name: object
    added: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class RemovePatternResult:
    name: str
    removed: bool


@dataclass(frozen=True)
class PatternInfo:
    """Public metadata of one active pattern (no regex, no replacement)."""

    name: str
    category: str
    priority: int


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time copy of the scrub counters."""

    total_scrubs: int
    by_category: dict[str, int] = field(default_factory=dict)
    by_pattern: dict[str, int] = field(default_factory=dict)
    pattern_count: int = 0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of ``validate_scrubbed()``.

    ``residual`` lists the names of the checks that still matched.
    """

    clean: bool
    residual: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HomoglyphMapping:
    char: str
    latin: str
    script: str
    code_point: int


@dataclass(frozen=True)
class HomoglyphFinding:
    """One lookalike character found at ``index`` of the scanned string."""

    index: int
    char: str
    latin: str
    script: str
    code_point: int


@dataclass(frozen=True)
class MixedScriptResult:
    mixed: bool
    scripts: list[str] = field(default_factory=list)
    findings: list[HomoglyphFinding] = field(default_factory=list)
