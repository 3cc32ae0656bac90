"""Residual-leakage validator.

A second, independent set of high-confidence checks run against text that has
ALREADY been scrubbed. It is deliberately decoupled from the pattern registry:
its job is to catch a registry rule that silently failed to fire, so it is not
configurable and does not share compiled patterns with the registry.

A non-clean result means the text must not be transmitted.
"""

from __future__ import annotations

from typing import Any

import re2  # google-re2. NEVER: import re

from piiscrub.errors import ResidualLeakageError
from piiscrub.models.results import ValidationResult
from piiscrub.utils.logger import get_logger

logger = get_logger(__name__)

# ===========================================================================
# RESIDUAL CHECKS
# COMPILED AT MODULE LOAD, never per-call
# ===========================================================================

RESIDUAL_CHECKS: tuple[tuple[str, Any], ...] = (
    ("api_key_pattern", re2.compile(r"sk-[a-zA-Z0-9_-]{20,}")),
    ("github_token", re2.compile(r"gh[pours]_[a-zA-Z0-9]{36,}")),
    ("aws_key", re2.compile(r"AKIA[A-Z0-9]{16}")),
    ("email", re2.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")),
    # Redaction tokens start with '[' which is outside the class, so
    # "Bearer [REDACTED_TOKEN]" never matches.
    ("bearer_token_raw", re2.compile(r"Bearer\s+[a-zA-Z0-9._/+=-]{20,}")),
    ("jwt", re2.compile(r"eyJ[a-zA-Z0-9_-]{10,}\.eyJ[a-zA-Z0-9_-]{10,}\.[a-zA-Z0-9_-]{10,}")),
    ("connection_string", re2.compile(r"(?i)(?:mongodb|postgres|mysql|redis)://[^\[\s]+")),
    ("pem_key", re2.compile(r"-----BEGIN (?:RSA |EC )?PRIVATE KEY-----")),
    ("ssn", re2.compile(r"\b\d{3}-\d{2}-\d{4}\b")),
    ("credit_card", re2.compile(r"\b(?:4\d{3}|5[1-5]\d{2})[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b")),
)


def validate_scrubbed(text: object) -> ValidationResult:
    """Check previously scrubbed text for residual sensitive data.

    Returns ``ValidationResult(clean=True, residual=[])`` for empty or non-str input.
    ``residual`` lists check names in check order. NEVER raises.
    """
    if not text or not isinstance(text, str):
        return ValidationResult(clean=True, residual=[])

    residual = [name for name, check in RESIDUAL_CHECKS if check.search(text)]
    if residual:
        # Check names only, never the matched text.
        logger.warning("Residual sensitive data after scrubbing", residual=residual)
    return ValidationResult(clean=not residual, residual=residual)


def ensure_clean(text: object) -> None:
    """Raise ``ResidualLeakageError`` if ``text`` fails ``validate_scrubbed()``."""
    result = validate_scrubbed(text)
    if not result.clean:
        raise ResidualLeakageError(result.residual)
