from __future__ import annotations

from pathlib import Path

from prngcheck.generators import MultiplicativePRNG, generate
from prngcheck.perf import (
    benchmark_combination,
    benchmark_generation,
    benchmark_tests,
    capture_profile,
    profile_application,
)


def test_benchmark_generation_returns_statistics() -> None:
    prng = MultiplicativePRNG(2**31, 262147, 262147)

    stats = benchmark_generation(prng, 100, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["max"] >= stats["min"]


def test_benchmark_combination_returns_statistics() -> None:
    first = MultiplicativePRNG(2**31, 262147, 262147)
    second = MultiplicativePRNG(2**31, 131075, 131075)

    stats = benchmark_combination(first, second, 16, 100, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["mean"] >= 0.0


def test_benchmark_tests_returns_statistics() -> None:
    values = generate(MultiplicativePRNG(2**31, 262147, 262147), 200)

    stats = benchmark_tests(values, repeat=2)

    assert set(stats) == {"min", "max", "mean"}


def test_capture_profile_returns_profile_output() -> None:
    with capture_profile() as (app, exporter):
        app._describe_settings  # attribute access to ensure object used

    profile_output = exporter()

    assert "function calls" in profile_output


def test_profile_application_runs_pipeline(tmp_path: Path) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[sequence]\ncount = 100\n", encoding="utf-8")

    profile_output = profile_application(config_path)

    assert "function calls" in profile_output
