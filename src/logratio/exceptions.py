"""
Error taxonomy for the logratio pipeline.

Every error subclasses ValueError, so callers that already guard data problems
with ``except ValueError`` keep working.
"""


class LogratioError(ValueError):
    """Base class for all errors raised by the logratio pipeline."""


class ConfigurationError(LogratioError):
    """An imputation or pipeline parameter is missing or out of range."""


class DegenerateInputError(LogratioError):
    """A sample has no non-zero value to derive a detection limit from."""


class InvalidModeError(LogratioError):
    """Unrecognized denominator, imputation or orientation option."""


class InvalidBaseError(LogratioError):
    """Unsupported logarithm base."""


class ZeroValueError(LogratioError):
    """A zero reached a stage that takes logarithms."""


class InvalidMatrixError(LogratioError):
    """The abundance matrix is not a non-negative, complete numeric 2-D table."""
