"""Custom scrub pattern loader.

Loads custom rules from a YAML file, or from the ``scrubber.custom_patterns``
section of the piiscrub config. Invalid entries are skipped with a WARNING;
the loader never raises.

IMPORT RULES:
  - ``import re2`` ONLY — ``import re`` is PROHIBITED in this file.

Accepted YAML shapes:

    # 1. bare list
    - name: employee_id
      pattern: 'EMP-\\d{6}'
      replacement: '[EMPLOYEE_ID]'

    # 2. mapping with a custom_patterns key
    version: 1
    custom_patterns:
      - name: employee_id
        pattern: 'EMP-\\d{6}'
        replacement: '[EMPLOYEE_ID]'
        category: identifiers     # default: custom
        priority: 66              # default: 90
        hint: EMP-                # str or list of str; default: none
        case_sensitive: true      # default: true
"""

from __future__ import annotations

from typing import Optional

import re2  # google-re2. NEVER: import re
import yaml

from piiscrub.constants import CATEGORY_CUSTOM, DEFAULT_CUSTOM_PRIORITY
from piiscrub.patterns.definitions import ScrubPattern
from piiscrub.utils.logger import get_logger

logger = get_logger(__name__)


def load_custom_patterns(path: str) -> list[ScrubPattern]:
    """Load custom patterns from a YAML file.

    Returns [] if the file does not exist (not an error).
    Returns [] on YAML parse / read error, logged at ERROR.

    Never raises.
    """
    try:
        with open(path) as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError:
        logger.debug("Custom pattern file not found — no custom patterns", path=path)
        return []
    except yaml.YAMLError as exc:
        logger.error("Custom pattern file is not valid YAML", path=path, error=str(exc))
        return []
    except OSError as exc:
        logger.error("Could not read custom pattern file", path=path, error=str(exc))
        return []

    patterns = parse_custom_patterns(raw)
    logger.debug("Custom patterns loaded", count=len(patterns), path=path)
    return patterns


def parse_custom_patterns(raw: object) -> list[ScrubPattern]:
    """Parse a top-level YAML object into ScrubPattern objects.

    Handles two YAML structures:
      1. Direct list: [{name: ..., pattern: ..., replacement: ...}, ...]
      2. Mapping with custom_patterns key: {version: 1, custom_patterns: [...]}
    """
    if raw is None:
        return []

    if isinstance(raw, list):
        return _parse_entries(raw)

    if isinstance(raw, dict):
        entries_raw = raw.get("custom_patterns", [])
        if entries_raw is None:
            return []
        if not isinstance(entries_raw, list):
            logger.warning(
                "custom_patterns key is not a list — ignoring",
                actual_type=type(entries_raw).__name__,
            )
            return []
        return _parse_entries(entries_raw)

    logger.warning(
        "Custom pattern YAML root is neither a list nor a mapping — no custom patterns",
        actual_type=type(raw).__name__,
    )
    return []


def _parse_entries(raw_list: list) -> list[ScrubPattern]:
    """Parse a list of raw YAML dicts into ScrubPattern objects.

    Skips invalid entries with a WARNING (never crashes).
    """
    patterns: list[ScrubPattern] = []

    for i, item in enumerate(raw_list):
        if not isinstance(item, dict):
            logger.warning(
                "Custom pattern entry is not a mapping — skipping",
                index=i,
                actual_type=type(item).__name__,
            )
            continue

        pattern = _parse_entry(i, item)
        if pattern is not None:
            patterns.append(pattern)

    return patterns


def _parse_entry(index: int, item: dict) -> Optional[ScrubPattern]:
    name = item.get("name")
    if not name or not isinstance(name, str):
        logger.warning("Custom pattern entry missing name — skipping", index=index)
        return None

    source = item.get("pattern")
    if not source or not isinstance(source, str):
        logger.warning("Custom pattern entry missing pattern — skipping", name=name)
        return None

    replacement = item.get("replacement")
    if not isinstance(replacement, str):
        logger.warning("Custom pattern replacement is not a string — skipping", name=name)
        return None

    category = item.get("category", CATEGORY_CUSTOM)
    if not category or not isinstance(category, str):
        logger.warning("Custom pattern category is not a string — using default", name=name)
        category = CATEGORY_CUSTOM

    priority = item.get("priority", DEFAULT_CUSTOM_PRIORITY)
    if isinstance(priority, bool) or not isinstance(priority, int) or priority < 0:
        logger.warning(
            "Custom pattern priority is not a non-negative integer — skipping",
            name=name,
            priority=priority,
        )
        return None

    try:
        regex = re2.compile(source)
    except re2.error as exc:
        logger.warning(
            "Custom pattern is not a valid google-re2 regex — skipping",
            name=name,
            error=str(exc),
        )
        return None

    try:
        return ScrubPattern(
            name=name,
            category=category,
            regex=regex,
            replacement=replacement,
            priority=priority,
            hint=item.get("hint"),
            case_sensitive=bool(item.get("case_sensitive", True)),
        )
    except (TypeError, ValueError) as exc:
        logger.warning("Custom pattern hint is invalid — skipping", name=name, error=str(exc))
        return None
