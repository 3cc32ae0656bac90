"""Tests for piiscrub/errors.py."""

from __future__ import annotations

import pytest

from piiscrub.errors import (
    E_CONFIG_INVALID,
    E_HOMOGLYPHS_DETECTED,
    E_INVALID_PATTERN,
    E_RESIDUAL_PII,
    E_SCRUB_FAILED,
    ERROR_MESSAGES,
    ConfigError,
    HomoglyphError,
    ResidualLeakageError,
    ScrubError,
)
from piiscrub.models.results import HomoglyphFinding


class TestErrorCodes:
    def test_every_code_has_a_message(self):
        for code in (
            E_CONFIG_INVALID,
            E_SCRUB_FAILED,
            E_INVALID_PATTERN,
            E_HOMOGLYPHS_DETECTED,
            E_RESIDUAL_PII,
        ):
            assert ERROR_MESSAGES[code]

    def test_codes_are_unique(self):
        assert len(set(ERROR_MESSAGES)) == len(ERROR_MESSAGES)


class TestExceptions:
    def test_scrub_error_str(self):
        err = ScrubError("something broke")
        assert err.code == E_SCRUB_FAILED
        assert str(err) == "[E401] something broke"

    def test_residual_leakage_error(self):
        err = ResidualLeakageError(["email", "ssn"])
        assert err.residual == ["email", "ssn"]
        assert err.code == E_RESIDUAL_PII
        assert "email, ssn" in str(err)
        assert isinstance(err, ScrubError)

    def test_config_error(self):
        with pytest.raises(ScrubError) as exc_info:
            raise ConfigError("bad file")
        assert exc_info.value.code == E_CONFIG_INVALID
        assert str(exc_info.value) == "[E101] bad file"

    def test_homoglyph_error(self):
        finding = HomoglyphFinding(index=1, char="а", latin="a", script="Cyrillic", code_point=0x0430)
        err = HomoglyphError([finding])
        assert err.findings == [finding]
        assert err.code == E_HOMOGLYPHS_DETECTED
        assert str(err).startswith("[E404] ")
        assert "U+0430" in str(err)
