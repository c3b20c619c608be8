"""Custom exceptions for the random bits battery."""

from __future__ import annotations


class RandomBitsError(Exception):
    """Base error type for package specific failures."""


class MissingFileError(RandomBitsError):
    """Raised when a configuration file could not be located or read."""


class InvalidConfigurationError(RandomBitsError):
    """Raised when the configuration or a test precondition is invalid."""


class TestExecutionError(RandomBitsError):
    """Raised when a statistical test fails to execute."""


class BitIndexError(RandomBitsError, IndexError):
    """Raised when a bit outside the generated sequence is requested."""
