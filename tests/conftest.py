"""Root test configuration for piiscrub.

Every test starts with a fresh process-default ScrubberContext so that custom
patterns and stats registered through the module-level API never bleed
between tests.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from piiscrub.scrubber.context import ScrubberContext, set_default_context
from piiscrub.utils.logger import reset_logging


@pytest.fixture(autouse=True)
def fresh_default_context() -> Iterator[ScrubberContext]:
    """Install a fresh default context for the test, and another one afterwards."""
    ctx = ScrubberContext()
    set_default_context(ctx)
    yield ctx
    set_default_context(ScrubberContext())


@pytest.fixture()
def context() -> ScrubberContext:
    """An independent context, isolated from the module-level API."""
    return ScrubberContext()


@pytest.fixture(autouse=True)
def clear_piiscrub_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config env overrides must never leak in from the developer's shell."""
    for var in ("PIISCRUB_CONFIG", "PIISCRUB_LOG_LEVEL", "PIISCRUB_INPUT_HARD_CAP"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def restore_library_logging() -> Iterator[None]:
    """Drop any handler a test installed through configure_logging()."""
    yield
    reset_logging()
