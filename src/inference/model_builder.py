"""
Bayesian model builder: PyMC model for truncated-normal observations.

This module assembles the Bayesian model used to recover the parameters of a
normal distribution that is only observed on a known interval [a, b]:

Mathematical model:
    μ ~ Normal(μ0, s_μ)
    σ ~ HalfNormal(s_σ)
    y_i ~ TruncatedNormal(μ, σ, lower=a, upper=b)

The density of each observation is the normal density renormalized to [a, b]:

    p(y | μ, σ) = φ((y - μ)/σ) / (σ [Φ((b - μ)/σ) - Φ((a - μ)/σ)])

As σ → ∞ this density flattens to the uniform 1/(b - a) and does not vanish,
and for μ far below a (or above b) it approaches an exponential on [a, b].
Wide priors leave room for that second mode in the tail, so the default priors
are scaled to the interval itself: μ0 = (a + b)/2 and s_μ = s_σ = b - a.
When a bound is infinite the observations set the reference instead: μ0 is
their median and the scale is their range (1 if they have no spread).
Flat priors remain available through ``PriorSpec(flat=True)``.

The builder itself holds no PyMC objects. It is created once and handed to the
sampler, which asks it for a fresh model on every call.
"""

from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray
import pymc as pm


def _reference_scale(
    lower: float,
    upper: float,
    observations: Optional[NDArray[np.float64]] = None,
) -> Tuple[float, float]:
    """Location and scale the default priors are centered on."""
    if np.isfinite(lower) and np.isfinite(upper):
        return 0.5 * (lower + upper), upper - lower

    if observations is not None and np.size(observations) > 0:
        observations = np.asarray(observations, dtype=np.float64)
        spread = float(np.ptp(observations))
        return float(np.median(observations)), spread if spread > 0 else 1.0

    finite = [bound for bound in (lower, upper) if np.isfinite(bound)]
    return (finite[0] if finite else 0.0), 1.0


class PriorSpec:
    """Specification of priors for the location and scale parameters."""

    def __init__(
        self,
        mean_loc: Optional[float] = None,
        mean_scale: Optional[float] = None,
        sd_scale: Optional[float] = None,
        flat: bool = False,
    ) -> None:
        """
        Initialize prior specification.

        Parameters
        ----------
        mean_loc : float, optional
            Prior mean for μ. If None, the midpoint of [a, b] (the median
            of the observations when a limit is infinite).
        mean_scale : float, optional
            Prior std for μ (Normal). If None, b - a.
        sd_scale : float, optional
            Prior scale for σ (HalfNormal). If None, b - a.
        flat : bool
            Use improper Flat / HalfFlat priors instead. Default False.

        Raises
        ------
        ValueError
            If a given scale is not strictly positive.
        """
        if mean_scale is not None and mean_scale <= 0:
            raise ValueError(f"mean_scale must be positive. Got {mean_scale}")
        if sd_scale is not None and sd_scale <= 0:
            raise ValueError(f"sd_scale must be positive. Got {sd_scale}")

        self.mean_loc = mean_loc
        self.mean_scale = mean_scale
        self.sd_scale = sd_scale
        self.flat = flat

    def resolve(
        self,
        lower: float,
        upper: float,
        observations: Optional[NDArray[np.float64]] = None,
    ) -> Tuple[float, float, float]:
        """
        Fill in interval-based defaults.

        Parameters
        ----------
        lower, upper : float
            Truncation limits. Either may be infinite.
        observations : NDArray[np.float64], optional
            Sample used for the defaults when a limit is infinite.

        Returns
        -------
        mean_loc, mean_scale, sd_scale : float
            All finite.
        """
        center, width = _reference_scale(lower, upper, observations)
        mean_loc = center if self.mean_loc is None else self.mean_loc
        mean_scale = width if self.mean_scale is None else self.mean_scale
        sd_scale = width if self.sd_scale is None else self.sd_scale
        return mean_loc, mean_scale, sd_scale

    def __repr__(self) -> str:
        """String representation."""
        if self.flat:
            return "PriorSpec(flat=True)"
        return (
            f"PriorSpec(mean_loc={self.mean_loc}, mean_scale={self.mean_scale}, "
            f"sd_scale={self.sd_scale})"
        )


class TruncatedNormalModelBuilder:
    """
    Builder for the truncated-normal PyMC model.

    Attributes
    ----------
    prior_spec : PriorSpec
        Prior specification shared by every model this builder produces.
    """

    mean_name = "mu"
    sd_name = "sigma"
    observed_name = "y"

    def __init__(self, prior_spec: Optional[PriorSpec] = None) -> None:
        """
        Initialize model builder.

        Parameters
        ----------
        prior_spec : PriorSpec, optional
            Prior specification. If None, use interval-scaled defaults.
        """
        self.prior_spec = prior_spec or PriorSpec()

    def _build_priors(self, lower: float, upper: float, observations: NDArray[np.float64]):
        """
        Build prior components.

        Returns
        -------
        mu : pm.TensorVariable
            Location of the untruncated normal
        sigma : pm.TensorVariable
            Scale of the untruncated normal
        """
        if self.prior_spec.flat:
            return pm.Flat(self.mean_name), pm.HalfFlat(self.sd_name)

        mean_loc, mean_scale, sd_scale = self.prior_spec.resolve(lower, upper, observations)
        mu = pm.Normal(self.mean_name, mu=mean_loc, sigma=mean_scale)
        sigma = pm.HalfNormal(self.sd_name, sigma=sd_scale)
        return mu, sigma

    def build(
        self,
        observations: NDArray[np.float64],
        lower: float,
        upper: float,
    ) -> pm.Model:
        """
        Build a fresh PyMC model conditioned on the observations.

        Parameters
        ----------
        observations : NDArray[np.float64]
            Truncated sample, shape (n_obs,).
        lower : float
            Left truncation limit a.
        upper : float
            Right truncation limit b.

        Returns
        -------
        model : pm.Model
            PyMC model ready for inference.
        """
        observations = np.asarray(observations, dtype=np.float64)
        if observations.ndim != 1:
            raise ValueError(
                f"observations must be 1-D. Got shape {observations.shape}"
            )
        lower, upper = float(lower), float(upper)

        with pm.Model() as model:
            mu, sigma = self._build_priors(lower, upper, observations)
            pm.TruncatedNormal(
                self.observed_name,
                mu=mu,
                sigma=sigma,
                lower=lower,
                upper=upper,
                observed=observations,
            )

        return model

    def __repr__(self) -> str:
        """String representation."""
        return f"TruncatedNormalModelBuilder(prior_spec={self.prior_spec})"
