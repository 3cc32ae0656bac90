"""Tests for ScrubberContext and the module-level API — piiscrub/scrubber/context.py.

Tests:
  - Independent contexts do not share patterns or stats
  - Module-level functions act on the process-default context
  - from_config() applies the input cap, the logging section and custom patterns
  - list_patterns() / reset_patterns() through both surfaces
"""

from __future__ import annotations

import logging

import re2

import piiscrub
from piiscrub.config import Config, LoggingConfig, ScrubberConfig
from piiscrub.patterns.definitions import BUILTIN_PATTERNS
from piiscrub.scrubber.context import (
    ScrubberContext,
    get_default_context,
    set_default_context,
)


class TestIsolation:
    def test_custom_pattern_stays_in_its_context(self, context):
        context.add_pattern("x", re2.compile(r"FOO"), "[FOO]")
        assert context.scrub("FOO") == "[FOO]"
        assert piiscrub.scrub("FOO") == "FOO"

    def test_two_contexts_independent(self):
        a = ScrubberContext()
        b = ScrubberContext()
        a.remove_pattern("email_address")
        assert a.scrub("user@example.com") == "user@example.com"
        assert b.scrub("user@example.com") == "[EMAIL]"

    def test_context_with_custom_builtin_table(self):
        ctx = ScrubberContext(builtin_patterns=())
        assert ctx.list_patterns() == []
        assert ctx.scrub("user@example.com") == "user@example.com"


class TestDefaultContext:
    def test_module_api_uses_default_context(self):
        piiscrub.add_custom_pattern("x", re2.compile(r"FOO"), "[FOO]")
        assert get_default_context().scrub("FOO") == "[FOO]"

    def test_get_default_context_is_stable(self):
        assert get_default_context() is get_default_context()

    def test_set_default_context(self):
        ctx = ScrubberContext(builtin_patterns=())
        set_default_context(ctx)
        assert piiscrub.scrub("user@example.com") == "user@example.com"
        assert get_default_context() is ctx


class TestPatternManagement:
    def test_list_patterns_matches_builtins(self):
        infos = piiscrub.list_patterns()
        assert len(infos) == len(BUILTIN_PATTERNS)
        assert [i.priority for i in infos] == sorted(i.priority for i in infos)

    def test_reset_patterns_drops_custom(self):
        piiscrub.add_custom_pattern("x", re2.compile(r"FOO"), "[FOO]")
        piiscrub.reset_patterns()
        assert "x" not in [i.name for i in piiscrub.list_patterns()]
        assert piiscrub.scrub("FOO") == "FOO"

    def test_add_custom_pattern_with_options(self):
        result = piiscrub.add_custom_pattern(
            "employee_id",
            re2.compile(r"(?i)emp-\d{6}"),
            "[EMPLOYEE_ID]",
            category="identifiers",
            priority=66,
            hint="emp-",
            case_sensitive=False,
        )
        assert result.added
        assert piiscrub.scrub("badge EMP-123456") == "badge [EMPLOYEE_ID]"
        stats = piiscrub.get_scrub_stats()
        assert stats.by_category == {"identifiers": 1}

    def test_add_invalid_pattern_reports_error(self):
        result = piiscrub.add_custom_pattern("x", "FOO", "[FOO]")
        assert result.added is False
        assert "E402" in (result.error or "")

    def test_remove_missing(self):
        assert piiscrub.remove_custom_pattern("missing").removed is False


class TestFromConfig:
    def test_applies_input_cap(self):
        config = Config(scrubber=ScrubberConfig(input_hard_cap=5))
        ctx = ScrubberContext.from_config(config)
        assert ctx.input_hard_cap == 5
        assert ctx.scrub("abcdefghij") == "abcde"

    def test_applies_logging_section(self, monkeypatch):
        calls: list[tuple[str, bool]] = []
        monkeypatch.setattr(
            "piiscrub.scrubber.context.configure_logging",
            lambda level, json_output: calls.append((level, json_output)),
        )
        ScrubberContext.from_config(Config(logging=LoggingConfig(level="DEBUG", json_output=False)))
        assert calls == [("DEBUG", False)]

    def test_logging_level_reaches_library_logger(self):
        ScrubberContext.from_config(Config(logging=LoggingConfig(level="ERROR")))
        library_logger = logging.getLogger("piiscrub")
        assert library_logger.level == logging.ERROR
        assert library_logger.propagate is False

    def test_registers_custom_patterns(self):
        config = Config(
            scrubber=ScrubberConfig(
                custom_patterns=[
                    {
                        "name": "employee_id",
                        "pattern": r"EMP-\d{6}",
                        "replacement": "[EMPLOYEE_ID]",
                        "hint": "EMP-",
                    },
                    {"name": "broken", "pattern": r"(a)\1", "replacement": "[X]"},
                ]
            )
        )
        ctx = ScrubberContext.from_config(config)
        names = [i.name for i in ctx.list_patterns()]
        assert "employee_id" in names
        assert "broken" not in names
        assert ctx.scrub("id EMP-123456") == "id [EMPLOYEE_ID]"

    def test_defaults(self):
        ctx = ScrubberContext.from_config(Config.defaults())
        assert ctx.input_hard_cap is None
        assert len(ctx.list_patterns()) == len(BUILTIN_PATTERNS)


class TestScrubValues:
    def test_scrub_values_on_context(self, context):
        assert context.scrub_values(["user@example.com", {"ip": "10.0.0.1"}]) == [
            "[EMAIL]",
            {"ip": "[IP]"},
        ]
