"""
Posterior estimation of normal parameters from truncated samples.

**Pipeline:**
- validate_inputs: Bounds, start values, data range, interval level
- InferenceAdapter: PyMC model + NUTS on a single core
- summarize_posterior: Mean, median, MAP draw, MCSE, credible interval, Rhat
- assemble_result: Immutable EstimationResult with the raw fit attached
"""

from estimation.errors import (
    TruncEstError,
    InvalidInputError,
    InvalidBoundsError,
    InvalidStartValueError,
    InvalidObservationsError,
    DataOutOfBoundsError,
    InvalidConfidenceLevelError,
    SamplingFailureError,
    SummarizationError,
)
from estimation.config import SamplerConfig
from estimation.validation import validate_inputs
from estimation.result import SummaryRow, EstimationResult, assemble_result
from estimation.summary import summarize_posterior, map_draw_index
from estimation.adapter import InferenceAdapter
from estimation.estimator import TruncatedNormalEstimator, estimate

__all__ = [
    # Errors
    "TruncEstError",
    "InvalidInputError",
    "InvalidBoundsError",
    "InvalidStartValueError",
    "InvalidObservationsError",
    "DataOutOfBoundsError",
    "InvalidConfidenceLevelError",
    "SamplingFailureError",
    "SummarizationError",
    # Pipeline
    "SamplerConfig",
    "validate_inputs",
    "InferenceAdapter",
    "summarize_posterior",
    "map_draw_index",
    "SummaryRow",
    "EstimationResult",
    "assemble_result",
    "TruncatedNormalEstimator",
    "estimate",
]
