"""Scrub engine benchmark.

Measures p50/p99 latency of scrub() across clean and secret-bearing inputs,
with and without the hint fast path, so a hint regression (a rule that stops
skipping clean text) shows up as a latency jump on the clean scenarios.

Usage (from project root, with .venv activated):
    python benchmarks/bench_scrub.py
"""

from __future__ import annotations

import dataclasses
import time
from typing import Any

from piiscrub.patterns.definitions import BUILTIN_PATTERNS
from piiscrub.scrubber.context import ScrubberContext

# ---------------------------------------------------------------------------
# Test inputs
# ---------------------------------------------------------------------------

CLEAN_SHORT = "Hello, how do I install Python on Ubuntu?"
CLEAN_MEDIUM = "Please summarize the financial report for the third quarter. " * 40  # ~2400 chars
CLEAN_LONG = "The quick brown fox jumped over the lazy dog. " * 180  # ~8280 chars

SECRET_LINE = (
    "user jane.doe@example.org logged in from 192.168.10.42 with "
    "sk-abcdefghijklmnopqrstuvwxyz123456 and password=hunter22"
)
SECRET_MEDIUM = (SECRET_LINE + "\n") * 20

LOG_LINE = (
    "2024-05-01T12:00:00Z INFO GET https://api.example.com/v1/items?page=2&token=abc "
    "from /home/alice/projects/app took 12ms"
)

P99_BUDGET_MS = 5.0


# ---------------------------------------------------------------------------
# Benchmark runner
# ---------------------------------------------------------------------------


def measure(fn: Any, *args: Any, n: int = 1_000) -> tuple[float, float, float]:
    """Run fn(*args) n times and return (p50, p99, max) in milliseconds."""
    latencies: list[float] = []
    for _ in range(n):
        start = time.perf_counter()
        fn(*args)
        latencies.append((time.perf_counter() - start) * 1_000)
    latencies.sort()
    return latencies[int(0.50 * n)], latencies[int(0.99 * n)], latencies[-1]


def _without_hints() -> ScrubberContext:
    """A context whose built-ins always run their regex (hint fast path disabled)."""
    unhinted = [dataclasses.replace(p, hint=None) for p in BUILTIN_PATTERNS]
    return ScrubberContext(builtin_patterns=unhinted)


def run_benchmarks() -> bool:
    """Run all benchmarks. Returns True if every hinted scenario is within budget."""
    WARMUP = 100
    N = 1_000

    hinted = ScrubberContext()
    unhinted = _without_hints()

    print("=" * 78)
    print("piiscrub scrub() Benchmark")
    print(f"Warmup: {WARMUP} calls | Measurement: {N} calls each | p99 budget {P99_BUDGET_MS}ms")
    print("=" * 78)

    scenarios = [
        ("Clean short", CLEAN_SHORT),
        ("Clean medium", CLEAN_MEDIUM),
        ("Clean long", CLEAN_LONG),
        ("Secrets, one line", SECRET_LINE),
        ("Secrets, 20 lines", SECRET_MEDIUM),
        ("Access log line", LOG_LINE),
    ]

    all_pass = True
    for name, text in scenarios:
        for _ in range(WARMUP):
            hinted.scrub(text)
            unhinted.scrub(text)

        p50, p99, worst = measure(hinted.scrub, text, n=N)
        raw_p50, raw_p99, _ = measure(unhinted.scrub, text, n=N)
        passed = p99 <= P99_BUDGET_MS
        all_pass = all_pass and passed
        status = "PASS" if passed else "FAIL"
        print(f"  [{status}] {name} ({len(text)} chars)")
        print(f"          hinted   p50={p50:.3f}ms  p99={p99:.3f}ms  worst={worst:.3f}ms")
        print(f"          unhinted p50={raw_p50:.3f}ms  p99={raw_p99:.3f}ms")

    print("=" * 78)
    print("RESULT: ALL BENCHMARKS PASSED" if all_pass else "RESULT: SOME BENCHMARKS FAILED")
    print("=" * 78)
    return all_pass


if __name__ == "__main__":
    import sys

    passed = run_benchmarks()
    sys.exit(0 if passed else 1)
