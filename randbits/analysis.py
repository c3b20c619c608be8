"""Utilities for merging per-test verdicts into a battery verdict.

The battery follows the FIPS 140-2 convention: a sequence is accepted only if
every enabled test passes.  There is no weighting and no partial credit; the
pass count is reported for information only.

When some of the standard tests are disabled through configuration a note is
attached to the merged metadata so reports make clear the verdict does not
cover the full battery.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .constants import DEFAULT_TEST_ORDER
from .tests.base import TestResult as RawTestResult

PARTIAL_BATTERY_NOTE = (
    "Not all of the standard tests were executed; the verdict covers the "
    "enabled subset only."
)


@dataclass(frozen=True)
class MergedTestResult:
    """Outcome of a single test, labelled with its registry name."""

    name: str
    passed: bool
    statistic: float
    details: str
    observed: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OverallResult:
    """Aggregate verdict built from the individual test outcomes."""

    passed: bool
    passed_count: int
    total: int
    tests: Tuple[MergedTestResult, ...]
    metadata: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def failed_tests(self) -> Tuple[str, ...]:
        return tuple(test.name for test in self.tests if not test.passed)


def merge_test_results(results: Sequence[tuple[str, RawTestResult]]) -> OverallResult:
    """Merge ``(name, result)`` pairs into an :class:`OverallResult`.

    An empty ``results`` sequence never passes.
    """

    merged = tuple(
        MergedTestResult(
            name=name,
            passed=bool(result.passed),
            statistic=float(result.statistic),
            details=result.details,
            observed=tuple(result.observed),
        )
        for name, result in results
    )
    passed_count = sum(1 for test in merged if test.passed)

    metadata: list[str] = []
    executed = {test.name for test in merged}
    if not set(DEFAULT_TEST_ORDER) <= executed:
        metadata.append(PARTIAL_BATTERY_NOTE)
    for test in merged:
        if not test.passed:
            metadata.append(f"Test '{test.name}' fell outside its bounds: {test.details}")

    return OverallResult(
        passed=bool(merged) and passed_count == len(merged),
        passed_count=passed_count,
        total=len(merged),
        tests=merged,
        metadata=tuple(metadata),
    )


__all__ = [
    "MergedTestResult",
    "OverallResult",
    "PARTIAL_BATTERY_NOTE",
    "merge_test_results",
]
