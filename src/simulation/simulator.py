"""
Truncated-normal data simulator.

Generates observations from a normal distribution restricted to [a, b], for
examples, parameter-recovery studies and tests of the estimator.

Sampling uses scipy's ``truncnorm``, which is parameterized by standardized
bounds:
    α = (a - μ) / σ,  β = (b - μ) / σ
"""

from typing import Optional
import numpy as np
from numpy.typing import NDArray
from scipy.stats import truncnorm


class TruncatedNormalSimulator:
    """
    Simulator for truncated-normal samples.

    Attributes
    ----------
    a : float
        Left truncation limit
    b : float
        Right truncation limit
    """

    def __init__(self, a: float, b: float) -> None:
        """
        Initialize simulator.

        Parameters
        ----------
        a : float
            Left truncation limit
        b : float
            Right truncation limit

        Raises
        ------
        ValueError
            If a >= b.
        """
        if not a < b:
            raise ValueError(f"Truncation bounds must satisfy a < b. Got a={a}, b={b}")

        self.a = float(a)
        self.b = float(b)

    def _standardized_bounds(self, mean: float, sd: float):
        return (self.a - mean) / sd, (self.b - mean) / sd

    def sample(
        self,
        n: int,
        mean: float,
        sd: float,
        random_seed: Optional[int] = None,
    ) -> NDArray[np.float64]:
        """
        Draw ``n`` observations.

        Parameters
        ----------
        n : int
            Number of observations.
        mean : float
            Location of the untruncated normal.
        sd : float
            Scale of the untruncated normal.
        random_seed : int, optional
            Random seed for reproducibility.

        Returns
        -------
        x : NDArray[np.float64]
            Observations, shape (n,), all within [a, b].
        """
        if n < 0:
            raise ValueError(f"n must be non-negative. Got {n}")
        if sd <= 0:
            raise ValueError(f"sd must be positive. Got {sd}")

        alpha, beta = self._standardized_bounds(mean, sd)
        rng = np.random.default_rng(random_seed)
        x = truncnorm.rvs(alpha, beta, loc=mean, scale=sd, size=n, random_state=rng)

        # guard against floating-point spill at the edges
        return np.clip(np.asarray(x, dtype=np.float64), self.a, self.b)

    def mean(self, mean: float, sd: float) -> float:
        """Expected value of the truncated distribution."""
        alpha, beta = self._standardized_bounds(mean, sd)
        return float(truncnorm.mean(alpha, beta, loc=mean, scale=sd))

    def std(self, mean: float, sd: float) -> float:
        """Standard deviation of the truncated distribution."""
        alpha, beta = self._standardized_bounds(mean, sd)
        return float(truncnorm.std(alpha, beta, loc=mean, scale=sd))

    def __repr__(self) -> str:
        """String representation."""
        return f"TruncatedNormalSimulator(a={self.a}, b={self.b})"
