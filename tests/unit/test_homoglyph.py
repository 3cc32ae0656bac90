"""Tests for the Unicode homoglyph detector — piiscrub/homoglyph/detector.py."""

from __future__ import annotations

import pytest

from piiscrub.homoglyph import (
    check_mixed_script,
    detect_homoglyphs,
    ensure_no_mixed_script,
    get_homoglyph_map,
    normalize_homoglyphs,
)
from piiscrub.errors import E_HOMOGLYPHS_DETECTED, HomoglyphError
from piiscrub.models.results import HomoglyphFinding

CYR_A = "а"
CYR_E = "е"
CYR_O = "о"
GREEK_O = "ο"


# ─── detect_homoglyphs ────────────────────────────────────────────────────────


class TestDetectHomoglyphs:
    def test_cyrillic_a(self):
        findings = detect_homoglyphs(f"p{CYR_A}ypal.com")
        assert findings == [
            HomoglyphFinding(index=1, char=CYR_A, latin="a", script="Cyrillic", code_point=0x0430)
        ]

    def test_two_cyrillic_o(self):
        findings = detect_homoglyphs(f"g{CYR_O}{CYR_O}gle.com")
        assert [f.latin for f in findings] == ["o", "o"]

    def test_greek_o(self):
        findings = detect_homoglyphs(f"g{GREEK_O}ogle")
        assert len(findings) == 1
        assert findings[0].script == "Greek"
        assert findings[0].latin == "o"

    def test_uppercase_cyrillic(self):
        findings = detect_homoglyphs("АВЕ")
        assert [f.latin for f in findings] == ["A", "B", "E"]

    def test_greek_rho_as_p(self):
        findings = detect_homoglyphs("ρaypal")
        assert findings[0].latin == "p"
        assert findings[0].script == "Greek"

    def test_mixed_scripts_in_order(self):
        findings = detect_homoglyphs(f"{CYR_A}pple.c{GREEK_O}m")
        assert [f.script for f in findings] == ["Cyrillic", "Greek"]

    def test_index_positions(self):
        findings = detect_homoglyphs(f"abc{CYR_A}def{CYR_E}")
        assert [f.index for f in findings] == [3, 7]

    def test_clean_latin(self):
        assert detect_homoglyphs("paypal.com") == []

    @pytest.mark.parametrize("value", ["", None, 42, ["a"]])
    def test_empty_or_non_string(self, value):
        assert detect_homoglyphs(value) == []


# ─── check_mixed_script ───────────────────────────────────────────────────────


class TestCheckMixedScript:
    def test_cyrillic_and_latin(self):
        result = check_mixed_script(f"{CYR_A}pple.com")
        assert result.mixed is True
        assert result.scripts == ["Cyrillic", "Latin"]

    def test_greek_and_latin(self):
        result = check_mixed_script(f"g{GREEK_O}ogle")
        assert result.mixed is True
        assert "Greek" in result.scripts

    def test_pure_latin(self):
        result = check_mixed_script("paypal.com")
        assert result.mixed is False
        assert result.scripts == ["Latin"]
        assert result.findings == []

    def test_pure_cyrillic_not_mixed(self):
        result = check_mixed_script(f"{CYR_A}{CYR_E}{CYR_O}")
        assert result.mixed is False
        assert result.scripts == ["Cyrillic"]

    def test_scripts_sorted(self):
        result = check_mixed_script(f"{CYR_A}b{GREEK_O}d")
        assert result.scripts == ["Cyrillic", "Greek", "Latin"]

    def test_findings_included(self):
        result = check_mixed_script(f"p{CYR_A}y")
        assert [f.char for f in result.findings] == [CYR_A]

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value):
        result = check_mixed_script(value)
        assert result.mixed is False
        assert result.scripts == []
        assert result.findings == []


# ─── normalize_homoglyphs ─────────────────────────────────────────────────────


class TestNormalizeHomoglyphs:
    def test_cyrillic_a(self):
        assert normalize_homoglyphs(f"p{CYR_A}ypal") == "paypal"

    def test_multiple(self):
        assert normalize_homoglyphs(f"{CYR_A}{CYR_E}{CYR_O}") == "aeo"

    def test_greek(self):
        assert normalize_homoglyphs(f"{GREEK_O}k") == "ok"

    def test_clean_text_unchanged(self):
        assert normalize_homoglyphs("hello world") == "hello world"

    def test_other_scripts_untouched(self):
        # Cyrillic "д" has no Latin lookalike in the table.
        assert normalize_homoglyphs("дa") == "дa"

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_empty_or_non_string(self, value):
        assert normalize_homoglyphs(value) == ""

    def test_normalized_text_has_no_findings(self):
        text = "".join(m.char for m in get_homoglyph_map())
        assert detect_homoglyphs(normalize_homoglyphs(text)) == []


# ─── get_homoglyph_map ────────────────────────────────────────────────────────


class TestGetHomoglyphMap:
    def test_counts_per_script(self):
        mappings = get_homoglyph_map()
        assert sum(1 for m in mappings if m.script == "Cyrillic") == 19
        assert sum(1 for m in mappings if m.script == "Greek") == 22

    def test_first_entry(self):
        first = get_homoglyph_map()[0]
        assert first.char == CYR_A
        assert first.latin == "a"
        assert first.code_point == 0x0430

    def test_code_points_match_chars(self):
        for mapping in get_homoglyph_map():
            assert ord(mapping.char) == mapping.code_point
            assert mapping.latin.isascii() and mapping.latin.isalpha()

    def test_returns_fresh_list(self):
        mappings = get_homoglyph_map()
        mappings.clear()
        assert len(get_homoglyph_map()) == 41


# ─── ensure_no_mixed_script ───────────────────────────────────────────────────


class TestEnsureNoMixedScript:
    def test_latin_text_returned(self):
        assert ensure_no_mixed_script("paypal.com") == "paypal.com"

    def test_pure_cyrillic_returned(self):
        text = CYR_A + CYR_O
        assert ensure_no_mixed_script(text) == text

    def test_mixed_script_raises(self):
        with pytest.raises(HomoglyphError) as exc_info:
            ensure_no_mixed_script(f"p{CYR_A}ypal.com")
        err = exc_info.value
        assert err.code == E_HOMOGLYPHS_DETECTED
        assert [f.code_point for f in err.findings] == [0x0430]
        assert "U+0430" in str(err)

    @pytest.mark.parametrize("value", [None, "", 7])
    def test_empty_or_non_string(self, value):
        assert ensure_no_mixed_script(value) == ""
