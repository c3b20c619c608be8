"""FIPS 140-2 style statistical tests package."""

from .base import StatisticalTest, TestResult
from .factory import DEFAULT_TESTS, build_test_suite, run_suite
from .statistical import LongestRunTest, MonobitTest, PokerTest, RunLengthTest

__all__ = [
    "DEFAULT_TESTS",
    "LongestRunTest",
    "MonobitTest",
    "PokerTest",
    "RunLengthTest",
    "StatisticalTest",
    "TestResult",
    "build_test_suite",
    "run_suite",
]
