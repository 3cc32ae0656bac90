"""Error codes and exceptions for piiscrub.

The scrub, validate and registry operations never raise on malformed input;
they return structured results instead. Exceptions exist only for the places
where a caller explicitly asks for a hard stop:

  - ``ResidualLeakageError``: raised by ``ensure_clean()`` /
    ``ScrubberContext.scrub_and_verify()`` when validation finds residual PII.
  - ``ConfigError``: raised by ``load_config()`` for an unreadable or invalid
    config file.
  - ``HomoglyphError``: raised by ``ensure_no_mixed_script()`` when text mixes
    Latin letters with lookalike characters.
"""

from __future__ import annotations

from typing import Any, Sequence

# ─── Error codes ──────────────────────────────────────────────────────────────

E_CONFIG_INVALID = "E101"
E_SCRUB_FAILED = "E401"
E_INVALID_PATTERN = "E402"
E_HOMOGLYPHS_DETECTED = "E404"
E_RESIDUAL_PII = "E405"

ERROR_MESSAGES: dict[str, str] = {
    E_CONFIG_INVALID: "Invalid piiscrub configuration",
    E_SCRUB_FAILED: "PII scrubbing operation failed",
    E_INVALID_PATTERN: "Invalid PII detection pattern",
    E_HOMOGLYPHS_DETECTED: "Unicode homoglyph characters detected in input",
    E_RESIDUAL_PII: "Residual PII found after scrubbing",
}


# ─── Exceptions ───────────────────────────────────────────────────────────────


class ScrubError(Exception):
    """Base class for piiscrub errors. Carries a stable error ``code``."""

    def __init__(self, message: str, code: str = E_SCRUB_FAILED) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ResidualLeakageError(ScrubError):
    """Scrubbed text still matches one or more residual-leakage checks.

    Downstream code must treat this as a hard stop before transmission.
    """

    def __init__(self, residual: Sequence[str]) -> None:
        self.residual = list(residual)
        super().__init__(
            f"{ERROR_MESSAGES[E_RESIDUAL_PII]}: {', '.join(self.residual)}",
            code=E_RESIDUAL_PII,
        )


class ConfigError(ScrubError):
    """Config file could not be read or failed validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=E_CONFIG_INVALID)


class HomoglyphError(ScrubError):
    """Text mixes Latin letters with Cyrillic/Greek lookalikes.

    Raised by ``ensure_no_mixed_script()`` for callers that refuse spoofable
    identifiers (hostnames, usernames) outright.
    """

    def __init__(self, findings: Sequence[Any]) -> None:
        self.findings = list(findings)
        chars = ", ".join(f"U+{f.code_point:04X}" for f in self.findings)
        super().__init__(
            f"{ERROR_MESSAGES[E_HOMOGLYPHS_DETECTED]}: {chars}",
            code=E_HOMOGLYPHS_DETECTED,
        )
