"""Custom exceptions for the PRNG uniformity checker."""

from __future__ import annotations


class PrngCheckError(Exception):
    """Base error type for application specific failures."""


class InvalidParameterError(PrngCheckError, ValueError):
    """Raised when a generator, combiner or test receives unusable arguments."""


class UnsortedSequenceError(InvalidParameterError):
    """Raised when an operation requiring ascending order gets unsorted data."""


class MissingFileError(PrngCheckError):
    """Raised when a required input file could not be located."""


class InvalidConfigurationError(PrngCheckError):
    """Raised when the configuration file is malformed or invalid."""


class TestExecutionError(PrngCheckError):
    """Raised when a uniformity test fails to execute."""


class InvalidInputError(PrngCheckError):
    """Raised when the provided input data does not meet application constraints."""


class EmptyInputFileError(InvalidInputError):
    """Raised when the input file does not contain any usable entries."""


class InputTooLargeError(InvalidInputError):
    """Raised when the input file exceeds the supported number of entries."""
