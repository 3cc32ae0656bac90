"""Structured logging for piiscrub.

piiscrub is imported into other programs, so it never calls
``structlog.configure()``. Each module logs through ``get_logger()``: a
structlog ``BoundLogger`` wrapped around a stdlib logger below ``piiscrub``,
with piiscrub's own processor chain. The ``piiscrub`` stdlib logger carries a
``NullHandler`` only; output appears once the host configures stdlib logging
or calls ``configure_logging()`` (``ScrubberContext.from_config()`` does).

Log events never carry raw input text. ``drop_raw_text`` replaces any field
under a text-bearing key before rendering.
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import IO, Any, Iterator, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from piiscrub.constants import SLOW_OPERATION_MS

LOGGER_NAME = "piiscrub"

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Event fields that could hold caller text.
RAW_TEXT_KEYS = frozenset({"text", "input", "value", "values", "match", "matched", "scrubbed"})
OMITTED = "[OMITTED]"

_library_logger = logging.getLogger(LOGGER_NAME)
_library_logger.addHandler(logging.NullHandler())

_renderer: Processor = structlog.processors.JSONRenderer()
_handler: Optional[logging.Handler] = None


def drop_raw_text(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace the value of every text-bearing field with ``[OMITTED]``."""
    for key in RAW_TEXT_KEYS.intersection(event_dict):
        event_dict[key] = OMITTED
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add epoch timestamp to log entries."""
    event_dict["timestamp"] = time.time()
    return event_dict


def render(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> Any:
    """Final processor: delegates to the renderer chosen by ``configure_logging()``."""
    return _renderer(logger, method_name, event_dict)


PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    add_timestamp,
    drop_raw_text,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    render,
]


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger for ``name``, always placed under ``piiscrub``.

    Args:
        name: Logger name (typically module name)
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send piiscrub's log events to ``stream`` (stderr by default).

    Only the ``piiscrub`` stdlib logger is touched: its level, one stream
    handler (replaced on every call) and ``propagate=False``. The host's
    structlog and root logging configuration are left alone.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
        json_output: If True, render JSON lines. If False, use console format.
        stream: Destination stream; ``sys.stderr`` when None.

    Raises:
        ValueError: ``log_level`` is not a known level name.
    """
    global _renderer, _handler

    level = LOG_LEVELS.get(log_level.upper()) if isinstance(log_level, str) else None
    if level is None:
        raise ValueError(f"Invalid log level {log_level!r}; expected one of {sorted(LOG_LEVELS)}")

    if json_output:
        _renderer = structlog.processors.JSONRenderer()
    else:
        _renderer = structlog.dev.ConsoleRenderer(colors=False)

    if _handler is not None:
        _library_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    _library_logger.addHandler(_handler)
    _library_logger.setLevel(level)
    _library_logger.propagate = False


def reset_logging() -> None:
    """Undo ``configure_logging()``: NullHandler only, level and propagation inherited."""
    global _renderer, _handler

    if _handler is not None:
        _library_logger.removeHandler(_handler)
        _handler = None
    _renderer = structlog.processors.JSONRenderer()
    _library_logger.setLevel(logging.NOTSET)
    _library_logger.propagate = True


@contextmanager
def log_duration(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    **fields: Any,
) -> Iterator[None]:
    """Time the enclosed block and log it as ``"<operation> completed"``.

    Logged at DEBUG, or WARNING above ``SLOW_OPERATION_MS``. An exception is
    logged at ERROR with its type only and then re-raised.
    """
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        logger.error(
            f"{operation} failed",
            operation=operation,
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
            error_type=type(exc).__name__,
            **fields,
        )
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    log = logger.warning if duration_ms > SLOW_OPERATION_MS else logger.debug
    log(f"{operation} completed", operation=operation, duration_ms=round(duration_ms, 3), **fields)
