"""Performance helpers for benchmarking and profiling the battery."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Mapping

from .app import RandomBitsCheckApp
from .config import load_config
from .generator import RandomBits
from .tests import build_test_suite, run_suite


def _summarise(runs: list[float]) -> Mapping[str, float]:
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


def benchmark_generation(*, repeat: int = 5) -> Mapping[str, float]:
    """Benchmark :meth:`RandomBits.new`."""

    timer = timeit.Timer(RandomBits.new)
    return _summarise(timer.repeat(repeat=repeat, number=1))


def benchmark_suite(
    bits: RandomBits | None = None,
    *,
    repeat: int = 5,
    max_workers: int | None = None,
) -> Mapping[str, float]:
    """Benchmark running the default battery over ``bits``."""

    target = bits if bits is not None else RandomBits.new()
    suite = build_test_suite(load_config(None), target)
    timer = timeit.Timer(lambda: run_suite(target, suite, max_workers=max_workers))
    return _summarise(timer.repeat(repeat=repeat, number=1))


def profile_application(config_path: Path | None = None, *, repeat: int = 1, limit: int = 25) -> str:
    """Profile the end-to-end application pipeline using :mod:`cProfile`."""

    app = RandomBitsCheckApp()
    profiler = cProfile.Profile()
    sink = io.StringIO()
    for _ in range(repeat):
        profiler.runcall(app.run, config_path, None, False, sink)
    return _format_stats(profiler, limit)


@contextmanager
def capture_profile(
    app: RandomBitsCheckApp | None = None,
) -> Iterator[tuple[RandomBitsCheckApp, Callable[..., str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple holds the :class:`RandomBitsCheckApp` to profile and a
    callable returning the formatted profile summary.
    """

    profiler = cProfile.Profile()
    target_app = app or RandomBitsCheckApp()
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        return _format_stats(profiler, limit)

    try:
        yield target_app, exporter
    finally:
        profiler.disable()


def _format_stats(profiler: cProfile.Profile, limit: int) -> str:
    stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stream)
    stats.strip_dirs().sort_stats("cumulative").print_stats(limit)
    return stream.getvalue()


__all__ = [
    "benchmark_generation",
    "benchmark_suite",
    "capture_profile",
    "profile_application",
]
