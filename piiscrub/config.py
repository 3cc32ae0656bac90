"""Config loading for piiscrub.

Reads `.piiscrub/config.yaml` (or `~/.piiscrub/config.yaml`).
Raises ConfigError on parse errors, a missing `version` field, or wrong-typed
sections. If no config file is found, returns default values (the library is
fully usable without config).

Config search order:
  1. `config_path` argument (if provided — for testing or explicit override)
  2. PIISCRUB_CONFIG environment variable (if set)
  3. `.piiscrub/config.yaml` (working directory — for development)
  4. `~/.piiscrub/config.yaml` (home directory)

Environment variable overrides:
  PIISCRUB_LOG_LEVEL — overrides logging.level
  PIISCRUB_INPUT_HARD_CAP — overrides scrubber.input_hard_cap (positive integer)
  PIISCRUB_CONFIG — sets an explicit config file path to try first

Example:

    version: 1
    scrubber:
      input_hard_cap: 524288
      custom_patterns:
        - name: employee_id
          pattern: 'EMP-\\d{6}'
          replacement: '[EMPLOYEE_ID]'
          hint: EMP-
    logging:
      level: INFO
      json_output: true
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from piiscrub.errors import ConfigError
from piiscrub.utils.logger import LOG_LEVELS, get_logger

logger = get_logger(__name__)

# ─── Version constants ────────────────────────────────────────────────────────

SUPPORTED_CONFIG_VERSION = 1

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

# ─── Validation sets ─────────────────────────────────────────────────────────

VALID_LOG_LEVELS: frozenset[str] = frozenset(LOG_LEVELS)

# Default config search paths (PIISCRUB_CONFIG env var prepended at runtime)
DEFAULT_CONFIG_PATHS = [
    ".piiscrub/config.yaml",
    os.path.expanduser("~/.piiscrub/config.yaml"),
]


# ─── Dataclasses ─────────────────────────────────────────────────────────────


@dataclass
class ScrubberConfig:
    """Scrubber configuration.

    input_hard_cap:  Truncate input to this many chars before scrubbing
                     (None = no cap).
    custom_patterns: Raw custom pattern entries; parsed by
                     ``piiscrub.patterns.loader.parse_custom_patterns``.
    """

    input_hard_cap: Optional[int] = None
    custom_patterns: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json_output: bool = True


@dataclass
class Config:
    """Root configuration object populated from .piiscrub/config.yaml.

    All fields have safe defaults.
    """

    version: int = SUPPORTED_CONFIG_VERSION
    scrubber: ScrubberConfig = field(default_factory=ScrubberConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Optional[str] = None  # Path to the loaded config file

    @classmethod
    def defaults(cls) -> "Config":
        return cls()

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        """Construct Config from a parsed YAML dict.

        Merges user-supplied values onto defaults; unknown keys are silently ignored.

        Raises:
            ConfigError: On a wrong-typed section or value.
        """
        # ── Scrubber ──────────────────────────────────────────────────────────
        scrubber_raw = _section(raw, "scrubber", path)
        input_hard_cap = scrubber_raw.get("input_hard_cap")
        if input_hard_cap is not None and not _is_positive_int(input_hard_cap):
            raise ConfigError(
                f"{path or 'config'}: scrubber.input_hard_cap must be a positive integer, "
                f"got {input_hard_cap!r}"
            )
        custom_patterns = scrubber_raw.get("custom_patterns") or []
        if not isinstance(custom_patterns, list):
            raise ConfigError(
                f"{path or 'config'}: scrubber.custom_patterns must be a list, "
                f"got {type(custom_patterns).__name__}"
            )
        scrubber = ScrubberConfig(
            input_hard_cap=input_hard_cap,
            custom_patterns=custom_patterns,
        )

        # ── Logging ───────────────────────────────────────────────────────────
        logging_raw = _section(raw, "logging", path)
        level = _validate_log_level(logging_raw.get("level", "INFO"), path)
        log_config = LoggingConfig(
            level=level,
            json_output=bool(logging_raw.get("json_output", True)),
        )

        return cls(
            version=raw.get("version", SUPPORTED_CONFIG_VERSION),
            scrubber=scrubber,
            logging=log_config,
            path=path,
        )


# ─── Config loading ───────────────────────────────────────────────────────────


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate piiscrub configuration.

    If no file is found at any search path, returns default Config (not an error).
    Env var overrides are applied whether or not a file was found.

    Raises:
        ConfigError: On YAML parse error, non-mapping root, missing ``version``
                     field, unsupported version, wrong-typed section, or invalid
                     env var override.
    """
    search_paths: list[str] = []
    if config_path:
        search_paths.append(config_path)
    env_config = os.environ.get("PIISCRUB_CONFIG")
    if env_config:
        search_paths.append(env_config)
    search_paths.extend(DEFAULT_CONFIG_PATHS)

    found_path: Optional[str] = None
    for candidate in search_paths:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            found_path = expanded
            break

    # ── No config file found ─────────────────────────────────────────────────
    if found_path is None:
        logger.debug("No config file found — using defaults", searched=search_paths)
        config = Config.defaults()
        _apply_env_overrides(config)
        return config

    # ── Parse config file ─────────────────────────────────────────────────────
    logger.info("Loading config", path=found_path)

    try:
        with open(found_path) as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {found_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read {found_path}: {exc}") from exc

    if not isinstance(raw, dict):
        if raw is None:
            raise ConfigError(
                f"{found_path} is missing the required 'version' field. "
                "Add 'version: 1' to the top of your config file."
            )
        raise ConfigError(
            f"{found_path} is not a valid YAML mapping. "
            "The config file must be a YAML dictionary at the top level."
        )

    # ── Version validation ────────────────────────────────────────────────────
    version = raw.get("version")
    if version is None:
        raise ConfigError(
            f"{found_path} is missing the required 'version' field. "
            "Add 'version: 1' to the top of your config file."
        )
    if version not in SUPPORTED_VERSIONS:
        raise ConfigError(
            f"Unsupported config version: {version}. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}."
        )

    config = Config.from_dict(raw, path=found_path)
    _apply_env_overrides(config)

    logger.info(
        "Config loaded",
        path=found_path,
        version=config.version,
        custom_pattern_count=len(config.scrubber.custom_patterns),
    )
    return config


def _apply_env_overrides(config: Config) -> None:
    """Apply environment variable overrides to a Config object in-place.

    Raises:
        ConfigError: If an override is set but invalid.
    """
    env_level = os.environ.get("PIISCRUB_LOG_LEVEL")
    if env_level is not None:
        config.logging.level = _validate_log_level(env_level, "PIISCRUB_LOG_LEVEL")

    env_cap = os.environ.get("PIISCRUB_INPUT_HARD_CAP")
    if env_cap is not None:
        try:
            cap = int(env_cap)
        except ValueError:
            raise ConfigError(
                f"PIISCRUB_INPUT_HARD_CAP environment variable is not a valid integer: '{env_cap}'"
            ) from None
        if cap <= 0:
            raise ConfigError(
                f"PIISCRUB_INPUT_HARD_CAP environment variable must be positive: '{env_cap}'"
            )
        config.scrubber.input_hard_cap = cap


def _section(raw: dict, key: str, path: Optional[str]) -> dict:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(
            f"{path or 'config'}: '{key}' section must be a mapping, got {type(value).__name__}"
        )
    return value


def _validate_log_level(level: object, source: Optional[str]) -> str:
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"{source or 'config'}: invalid log level {level!r}. "
            f"Supported values: {sorted(VALID_LOG_LEVELS)}."
        )
    return level.upper()


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
