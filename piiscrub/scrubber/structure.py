"""Recursive scrubbing of nested values.

Walks ``str`` / ``list`` / ``tuple`` / ``Mapping`` values and scrubs every
string leaf. Containers are always rebuilt; the input is never mutated and
never returned by identity. Everything else (None, numbers, booleans, bytes,
arbitrary objects) passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

ScrubFn = Callable[[str], str]


def scrub_value(value: Any, scrub: ScrubFn) -> Any:
    if isinstance(value, str):
        return scrub(value)
    if isinstance(value, list):
        return [scrub_value(item, scrub) for item in value]
    if isinstance(value, tuple):
        return tuple(scrub_value(item, scrub) for item in value)
    if isinstance(value, Mapping):
        # Keys are kept as-is; only values are scrubbed.
        return {key: scrub_value(item, scrub) for key, item in value.items()}
    return value


def scrub_values(values: Any, scrub: ScrubFn) -> list[Any]:
    """Scrub each element of a list or tuple. Any other input returns ``[]``."""
    if not isinstance(values, (list, tuple)):
        return []
    return [scrub_value(item, scrub) for item in values]
