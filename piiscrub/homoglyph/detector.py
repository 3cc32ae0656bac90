"""Unicode homoglyph detector.

Finds Cyrillic and Greek characters that render like Latin letters, the
building block of mixed-script (IDN homograph) spoofing such as "pаypal.com"
with a Cyrillic "а".

Indices in findings are Python string indices (code points).

IMPORT RULES:
  - ``import re2`` ONLY — ``import re`` is PROHIBITED in this file.
"""

from __future__ import annotations

import re2  # google-re2. NEVER: import re

from piiscrub.errors import HomoglyphError
from piiscrub.models.results import HomoglyphFinding, HomoglyphMapping, MixedScriptResult
from piiscrub.utils.logger import get_logger

logger = get_logger(__name__)

SCRIPT_CYRILLIC = "Cyrillic"
SCRIPT_GREEK = "Greek"
SCRIPT_LATIN = "Latin"

# lookalike char -> (latin, script). Insertion order is the public table order.
_HOMOGLYPHS: dict[str, tuple[str, str]] = {
    # Cyrillic
    "а": ("a", SCRIPT_CYRILLIC),
    "е": ("e", SCRIPT_CYRILLIC),
    "о": ("o", SCRIPT_CYRILLIC),
    "р": ("p", SCRIPT_CYRILLIC),
    "с": ("c", SCRIPT_CYRILLIC),
    "у": ("y", SCRIPT_CYRILLIC),
    "х": ("x", SCRIPT_CYRILLIC),
    "Ь": ("b", SCRIPT_CYRILLIC),  # capital soft sign
    "А": ("A", SCRIPT_CYRILLIC),
    "В": ("B", SCRIPT_CYRILLIC),
    "Е": ("E", SCRIPT_CYRILLIC),
    "К": ("K", SCRIPT_CYRILLIC),
    "М": ("M", SCRIPT_CYRILLIC),
    "Н": ("H", SCRIPT_CYRILLIC),
    "О": ("O", SCRIPT_CYRILLIC),
    "Р": ("P", SCRIPT_CYRILLIC),
    "С": ("C", SCRIPT_CYRILLIC),
    "Т": ("T", SCRIPT_CYRILLIC),
    "Х": ("X", SCRIPT_CYRILLIC),
    # Greek
    "ο": ("o", SCRIPT_GREEK),
    "α": ("a", SCRIPT_GREEK),
    "ε": ("e", SCRIPT_GREEK),  # approximate
    "ι": ("i", SCRIPT_GREEK),
    "κ": ("k", SCRIPT_GREEK),
    "ν": ("v", SCRIPT_GREEK),
    "ρ": ("p", SCRIPT_GREEK),
    "τ": ("t", SCRIPT_GREEK),  # approximate
    "υ": ("u", SCRIPT_GREEK),
    "Ο": ("O", SCRIPT_GREEK),
    "Α": ("A", SCRIPT_GREEK),
    "Β": ("B", SCRIPT_GREEK),
    "Ε": ("E", SCRIPT_GREEK),
    "Η": ("H", SCRIPT_GREEK),
    "Ι": ("I", SCRIPT_GREEK),
    "Κ": ("K", SCRIPT_GREEK),
    "Μ": ("M", SCRIPT_GREEK),
    "Ν": ("N", SCRIPT_GREEK),
    "Ρ": ("P", SCRIPT_GREEK),
    "Τ": ("T", SCRIPT_GREEK),
    "Υ": ("Y", SCRIPT_GREEK),
    "Ζ": ("Z", SCRIPT_GREEK),
}

_TRANSLATION = str.maketrans({char: latin for char, (latin, _) in _HOMOGLYPHS.items()})

_LATIN_LETTER = re2.compile(r"[a-zA-Z]")


def detect_homoglyphs(text: object) -> list[HomoglyphFinding]:
    """Return one finding per lookalike character, in string order.

    Non-str or empty input returns [].
    """
    if not text or not isinstance(text, str):
        return []

    findings: list[HomoglyphFinding] = []
    for index, char in enumerate(text):
        mapping = _HOMOGLYPHS.get(char)
        if mapping is not None:
            latin, script = mapping
            findings.append(HomoglyphFinding(index, char, latin, script, ord(char)))
    return findings


def check_mixed_script(text: object) -> MixedScriptResult:
    """Report whether ``text`` mixes ASCII Latin letters with lookalikes.

    ``mixed`` is True only when both are present. ``scripts`` is sorted and
    includes "Latin" whenever a Latin letter occurs.
    """
    if not text or not isinstance(text, str):
        return MixedScriptResult(mixed=False, scripts=[], findings=[])

    findings = detect_homoglyphs(text)
    has_latin = _LATIN_LETTER.search(text) is not None
    scripts = {finding.script for finding in findings}
    if has_latin:
        scripts.add(SCRIPT_LATIN)

    return MixedScriptResult(
        mixed=has_latin and bool(findings),
        scripts=sorted(scripts),
        findings=findings,
    )


def normalize_homoglyphs(text: object) -> str:
    """Replace every lookalike with its Latin equivalent. Non-str input returns ""."""
    if not text or not isinstance(text, str):
        return ""
    return text.translate(_TRANSLATION)


def get_homoglyph_map() -> list[HomoglyphMapping]:
    """Return the full lookalike table, Cyrillic entries first."""
    return [
        HomoglyphMapping(char, latin, script, ord(char))
        for char, (latin, script) in _HOMOGLYPHS.items()
    ]


def ensure_no_mixed_script(text: object) -> str:
    """Return ``text`` unchanged, or raise ``HomoglyphError`` if it is mixed-script.

    Non-str input returns "" like ``normalize_homoglyphs()``.
    """
    if not text or not isinstance(text, str):
        return ""
    result = check_mixed_script(text)
    if result.mixed:
        logger.warning(
            "Mixed-script text rejected",
            scripts=result.scripts,
            homoglyph_count=len(result.findings),
        )
        raise HomoglyphError(result.findings)
    return text
