"""Deterministic LCG bit generator with a FIPS 140-2 style test battery."""

from .analysis import MergedTestResult, OverallResult
from .app import RandomBitsCheckApp, RunResult
from .generator import RandomBits, new

__all__ = [
    "MergedTestResult",
    "OverallResult",
    "RandomBits",
    "RandomBitsCheckApp",
    "RunResult",
    "new",
]
