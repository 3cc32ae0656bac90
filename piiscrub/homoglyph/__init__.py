"""piiscrub homoglyph package.

Public API:
    detect_homoglyphs()     — find Cyrillic/Greek lookalikes of Latin letters
    check_mixed_script()    — Latin + lookalike in one string (homograph indicator)
    normalize_homoglyphs()  — replace lookalikes with their Latin equivalents
    get_homoglyph_map()     — the full lookalike table
    ensure_no_mixed_script() — raise HomoglyphError on mixed-script text
"""
from piiscrub.homoglyph.detector import (
    check_mixed_script,
    detect_homoglyphs,
    ensure_no_mixed_script,
    get_homoglyph_map,
    normalize_homoglyphs,
)

__all__ = [
    "check_mixed_script",
    "detect_homoglyphs",
    "ensure_no_mixed_script",
    "get_homoglyph_map",
    "normalize_homoglyphs",
]
