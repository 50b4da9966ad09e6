"""
Exception hierarchy for truncated-normal estimation.

Input problems are reported as ``ValueError`` subclasses and raised before any
sampling happens. Failures of the sampler or of posterior summarization are
``RuntimeError`` subclasses. Every error derives from ``TruncEstError`` so
callers can catch the whole family at once.
"""


class TruncEstError(Exception):
    """Base class for all estimation errors."""


class InvalidInputError(TruncEstError, ValueError):
    """Base class for errors raised by input validation."""


class InvalidBoundsError(InvalidInputError):
    """Truncation bounds do not satisfy a < b."""


class InvalidStartValueError(InvalidInputError):
    """Initial value for sigma is not strictly positive."""


class InvalidObservationsError(InvalidInputError):
    """Observations are not a 1-D numeric sequence."""


class DataOutOfBoundsError(InvalidInputError):
    """At least one observation lies outside [a, b]."""


class InvalidConfidenceLevelError(InvalidInputError):
    """Confidence level is not strictly between 0.5 and 1."""


class SamplingFailureError(TruncEstError, RuntimeError):
    """The inference engine failed to produce usable posterior draws."""


class SummarizationError(TruncEstError, RuntimeError):
    """Posterior draws could not be reduced to summary statistics."""
