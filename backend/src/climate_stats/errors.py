"""Exceptions raised by the statistics engine.

Every engine error is a ``ValueError`` subclass, so callers that only care
about bad input can catch ``ValueError``.
"""


class StatisticsError(ValueError):
    """Base class for precondition violations in the statistics engine."""


class InsufficientDataError(StatisticsError):
    """Sample is empty or too short for the requested statistic."""


class InvalidSampleError(StatisticsError):
    """Sample contains NaN or infinite values."""


class NonChronologicalSeriesError(StatisticsError):
    """Time series years are not in ascending order."""
