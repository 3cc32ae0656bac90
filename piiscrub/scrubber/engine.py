"""Scrub engine — applies an ordered pattern sequence to a text buffer.

Provides:
  - ``apply_patterns()``: run priority-sorted patterns over text with the hint
    fast path; reports each rule that changed the text via a callback.
  - ``hint_matches()``: the cheap substring pre-test for one pattern.
  - ``apply_input_cap()``: optional hard input limit applied before scrubbing.

IMPORT RULES:
  - ``import re2`` ONLY (via compiled ScrubPattern.regex) — ``import re`` is PROHIBITED.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from piiscrub.patterns.definitions import ScrubPattern
from piiscrub.utils.logger import get_logger

logger = get_logger(__name__)

#: Called once per pattern that actually changed the text.
OnReplace = Callable[[ScrubPattern], None]


def hint_matches(pattern: ScrubPattern, text: str, folded: str) -> bool:
    """Return False only when ``pattern`` cannot possibly match ``text``.

    Case-sensitive patterns test their hint literals against ``text``;
    case-insensitive ones test against ``folded``, the ``str.casefold()`` copy
    (hints are stored case-folded). re2's ``(?i)`` folds "ſ" to "s";
    ``str.lower()`` keeps "ſ", so a lower-cased copy could hide a hint from text
    the regex still matches.
    A pattern without a hint always returns True.
    """
    if pattern.hint is None:
        return True
    haystack = text if pattern.case_sensitive else folded
    for literal in pattern.hint:
        if literal in haystack:
            return True
    return False


def apply_patterns(
    text: str,
    patterns: Sequence[ScrubPattern],
    on_replace: Optional[OnReplace] = None,
) -> str:
    """Apply ``patterns`` in the given order to ``text``.

    PRECONDITION: ``patterns`` is already priority-sorted (registry snapshot or
    scoped snapshot). ``text`` is a non-empty str.

    INVARIANTS:
      - Each pattern runs over the CURRENT text (output of earlier patterns),
        never the original.
      - The case-folded copy used by case-insensitive hints is computed lazily
        and discarded whenever a pattern changes the text.
      - A pattern that raises is logged at ERROR and skipped; the remaining
        patterns still run. NEVER raises.

    Args:
        text:       Input text.
        patterns:   Priority-sorted patterns to apply.
        on_replace: Optional callback invoked with each pattern that changed the text.

    Returns:
        The scrubbed text.
    """
    result = text
    folded: Optional[str] = None

    for pattern in patterns:
        if pattern.hint is not None and not pattern.case_sensitive and folded is None:
            folded = result.casefold()
        if not hint_matches(pattern, result, folded or ""):
            continue

        try:
            replaced = pattern.regex.sub(pattern.replacement, result)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Scrub pattern failed — skipping",
                pattern=pattern.name,
                category=pattern.category,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            continue

        if replaced != result:
            result = replaced
            folded = None
            if on_replace is not None:
                on_replace(pattern)

    return result


def apply_input_cap(text: str, limit: Optional[int]) -> str:
    """Cap ``text`` at ``limit`` chars. ``None`` means no cap.

    Truncation drops the tail BEFORE scrubbing, so dropped text is never
    emitted. NEVER raises. O(1) length check when text fits.
    """
    if limit is not None and len(text) > limit:
        logger.warning(
            "Input truncated before scrubbing",
            limit=limit,
            original_length=len(text),
        )
        return text[:limit]
    return text
