"""Shared constants for piiscrub.

Replacement tokens, category names and priority defaults used across modules
are defined here. No magic strings in other modules — import from here.
"""

# ─── Replacement tokens ───────────────────────────────────────────────────────
# Tokens never contain digits, '@' or '://' so that no later, broader rule can
# re-match a token produced by an earlier one.

TOKEN_USER_HOME: str = "{USER_HOME}"
TOKEN_REDACTED_KEY: str = "[REDACTED_KEY]"
TOKEN_REDACTED_SECRET: str = "[REDACTED_SECRET]"
TOKEN_REDACTED_TOKEN: str = "[REDACTED_TOKEN]"
TOKEN_IP: str = "[IP]"
TOKEN_HOST: str = "[HOST]"
TOKEN_PARAMS: str = "[PARAMS]"
TOKEN_EMAIL: str = "[EMAIL]"
TOKEN_PHONE: str = "[PHONE]"
TOKEN_ENV_VAR: str = "[ENV_VAR]"
TOKEN_STRING: str = "[STRING]"
TOKEN_PATH: str = "[PATH]"
TOKEN_UUID: str = "[UUID]"
TOKEN_CREDIT_CARD: str = "[CREDIT_CARD]"
TOKEN_SSN: str = "[SSN]"
TOKEN_MAC_ADDR: str = "[MAC_ADDR]"
TOKEN_PRIVATE_KEY: str = "[PRIVATE_KEY]"
TOKEN_CONNECTION_STRING: str = "[CONNECTION_STRING]"
TOKEN_HASH: str = "[HASH]"

# ─── Categories ───────────────────────────────────────────────────────────────

CATEGORY_CREDENTIALS: str = "credentials"
CATEGORY_AUTH: str = "auth"
CATEGORY_SECRETS: str = "secrets"
CATEGORY_ENV: str = "env"
CATEGORY_NETWORK: str = "network"
CATEGORY_PERSONAL: str = "personal"
CATEGORY_IDENTIFIERS: str = "identifiers"
CATEGORY_PATHS: str = "paths"
CATEGORY_GIT: str = "git"
CATEGORY_CODE: str = "code"
CATEGORY_CUSTOM: str = "custom"

BUILTIN_CATEGORIES: frozenset[str] = frozenset({
    CATEGORY_CREDENTIALS,
    CATEGORY_AUTH,
    CATEGORY_SECRETS,
    CATEGORY_ENV,
    CATEGORY_NETWORK,
    CATEGORY_PERSONAL,
    CATEGORY_IDENTIFIERS,
    CATEGORY_PATHS,
    CATEGORY_GIT,
    CATEGORY_CODE,
})

# ─── Custom pattern defaults ──────────────────────────────────────────────────

# Custom rules run after every built-in band unless the caller says otherwise.
DEFAULT_CUSTOM_PRIORITY: int = 90

# ─── Logging thresholds ───────────────────────────────────────────────────────

# log_duration() escalates DEBUG → WARNING above this duration.
SLOW_OPERATION_MS: float = 50.0
