"""
Input validation for truncated-normal estimation.

All checks run before any sampling and stop at the first failure.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from estimation.errors import (
    DataOutOfBoundsError,
    InvalidBoundsError,
    InvalidConfidenceLevelError,
    InvalidObservationsError,
    InvalidStartValueError,
)


def as_observations(x: ArrayLike) -> NDArray[np.float64]:
    """Coerce observations to a 1-D float array."""
    try:
        arr = np.asarray(x, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidObservationsError(f"Observations must be numeric: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidObservationsError(
            f"Observations must be 1-D. Got shape {arr.shape}"
        )
    return arr


def validate_inputs(
    x: ArrayLike,
    a: float,
    b: float,
    sd_start: float = 1.0,
    ci_level: float = 0.95,
) -> NDArray[np.float64]:
    """
    Check estimation inputs.

    Parameters
    ----------
    x : ArrayLike
        Observations from the truncated normal.
    a, b : float
        Truncation limits.
    sd_start : float
        Initial value for sigma.
    ci_level : float
        Credible interval level.

    Returns
    -------
    observations : NDArray[np.float64]
        ``x`` as a 1-D float array.

    Raises
    ------
    InvalidBoundsError
        If not a < b.
    InvalidStartValueError
        If not sd_start > 0.
    InvalidObservationsError
        If x is not a 1-D numeric sequence.
    DataOutOfBoundsError
        If any observation is outside [a, b]. NaN counts as outside.
    InvalidConfidenceLevelError
        If ci_level is not in (0.5, 1).
    """
    if not a < b:
        raise InvalidBoundsError(f"Truncation bounds must satisfy a < b. Got a={a}, b={b}")

    if not sd_start > 0:
        raise InvalidStartValueError(f"sd_start must be positive. Got {sd_start}")

    observations = as_observations(x)

    inside = (observations >= a) & (observations <= b)
    if not np.all(inside):
        bad = observations[~inside]
        raise DataOutOfBoundsError(
            f"{bad.size} observation(s) outside [{a}, {b}], e.g. {bad[0]}"
        )

    if not 0.5 < ci_level < 1:
        raise InvalidConfidenceLevelError(
            f"ci_level must be in (0.5, 1). Got {ci_level}"
        )

    return observations
