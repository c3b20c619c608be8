"""Application orchestration for the random bits battery."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Mapping, Sequence, TextIO

from .analysis import MergedTestResult, merge_test_results
from .config import RandBitsConfig, load_config
from .generator import RandomBits
from .logging import log_run_result
from .reporting import print_console_summary, write_markdown_report
from .tests import StatisticalTest, build_test_suite, run_suite


@dataclass(frozen=True)
class RunResult:
    """Summary of a full battery run."""

    config_path: Path | None
    bit_count: int
    passed: bool
    passed_count: int
    total_tests: int
    test_results: Sequence[MergedTestResult]
    report_metadata: Sequence[str]
    started_at: datetime
    duration: timedelta
    report_path: Path | None = None
    log_path: Path | None = None
    warnings: Sequence[str] = field(default_factory=tuple)


class RandomBitsCheckApp:
    """High level service wiring configuration, generation, execution, and rendering."""

    def __init__(
        self,
        registry: Mapping[str, StatisticalTest] | None = None,
        generator: Callable[[], RandomBits] = RandomBits.new,
    ) -> None:
        self._registry = registry
        self._generator = generator

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        config_path: Path | None = None,
        report_path: Path | None = None,
        verbose: bool = False,
        stream: TextIO | None = None,
    ) -> RunResult:
        """Generate the sequence, run the enabled tests, then report and log."""

        started_at = datetime.now(timezone.utc)
        clock = time.perf_counter()

        config = load_config(config_path)
        bits = self._generator()
        run_result = self._execute(config, bits, started_at, clock)

        print_console_summary(run_result, verbose=verbose, stream=stream)
        target = report_path if report_path is not None else config.output.report_path
        if target is not None:
            written = write_markdown_report(run_result, target)
            run_result = replace(run_result, report_path=written)
        if config.output.log_results:
            log_file = log_run_result(
                run_result,
                run_result.report_path,
                log_path=config.output.run_log_path,
                fmt=config.output.run_log_format,
                retention=config.output.run_log_retention,
            )
            run_result = replace(run_result, log_path=log_file)
        return run_result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _execute(
        self,
        config: RandBitsConfig,
        bits: RandomBits,
        started_at: datetime,
        clock: float,
    ) -> RunResult:
        suite = build_test_suite(config, bits, registry=self._registry)
        outcomes = run_suite(bits, suite, max_workers=config.execution.max_workers)
        overall = merge_test_results(outcomes)
        return RunResult(
            config_path=config.source,
            bit_count=bits.bit_count,
            passed=overall.passed,
            passed_count=overall.passed_count,
            total_tests=overall.total,
            test_results=overall.tests,
            report_metadata=overall.metadata,
            started_at=started_at,
            duration=timedelta(seconds=time.perf_counter() - clock),
            warnings=config.warnings,
        )


__all__ = ["RandomBitsCheckApp", "RunResult"]
