"""Performance helpers for benchmarking generators and profiling runs."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Mapping, Sequence

from .app import PrngCheckApp
from .combiner import combine
from .generators.base import PseudoRandomGenerator, generate
from .tests.statistical import check_kolmogorov_test_uniform_quantile, check_pearson_test_uniform


def benchmark_generation(
    prng: PseudoRandomGenerator, count: int, *, repeat: int = 5
) -> Mapping[str, float]:
    """Benchmark drawing ``count`` values from ``prng``; the generator is reset each run."""

    def _run() -> None:
        prng.reset()
        generate(prng, count)

    return _summarise(timeit.Timer(_run).repeat(repeat=repeat, number=1))


def benchmark_combination(
    first: PseudoRandomGenerator,
    second: PseudoRandomGenerator,
    offset: int,
    count: int,
    *,
    repeat: int = 5,
) -> Mapping[str, float]:
    """Benchmark :func:`prngcheck.combiner.combine` with both generators reset each run."""

    def _run() -> None:
        first.reset()
        second.reset()
        combine(first, second, offset, count)

    return _summarise(timeit.Timer(_run).repeat(repeat=repeat, number=1))


def benchmark_tests(
    values: Sequence[float], *, cell_count: int = 20, repeat: int = 5
) -> Mapping[str, float]:
    """Benchmark one Kolmogorov and one Pearson evaluation of ``values``."""

    cached = tuple(values)

    def _run() -> None:
        check_kolmogorov_test_uniform_quantile(1.36, cached)
        check_pearson_test_uniform(30.14, cached, cell_count)

    return _summarise(timeit.Timer(_run).repeat(repeat=repeat, number=1))


def profile_application(config_path: Path | None = None, *, repeat: int = 1) -> str:
    """Profile the end-to-end application pipeline using :mod:`cProfile`."""

    app = PrngCheckApp(stream=io.StringIO())
    profiler = cProfile.Profile()
    for _ in range(repeat):
        profiler.runcall(app.run, config_path)
    stream = io.StringIO()
    pstats.Stats(profiler, stream=stream).strip_dirs().sort_stats("cumulative").print_stats(25)
    return stream.getvalue()


@contextmanager
def capture_profile(
    app: PrngCheckApp | None = None,
) -> Iterator[tuple[PrngCheckApp, Callable[[int], str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple contains the :class:`PrngCheckApp` instance to use for
    the profiled operations and a callable that returns a formatted profile
    summary when invoked.
    """

    profiler = cProfile.Profile()
    target_app = app or PrngCheckApp(stream=io.StringIO())
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        stream = io.StringIO()
        pstats.Stats(profiler, stream=stream).strip_dirs().sort_stats("cumulative").print_stats(limit)
        return stream.getvalue()

    try:
        yield target_app, exporter
    finally:
        profiler.disable()


def _summarise(runs: Sequence[float]) -> Mapping[str, float]:
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


__all__ = [
    "benchmark_combination",
    "benchmark_generation",
    "benchmark_tests",
    "capture_profile",
    "profile_application",
]
