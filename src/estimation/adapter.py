"""
Adapter between the estimation pipeline and the PyMC inference layer.

Builds a fresh model from the injected builder, runs the sampler once and
turns any engine failure into ``SamplingFailureError``.
"""

from typing import Optional, Tuple
import logging

import numpy as np
from numpy.typing import NDArray

from inference.model_builder import TruncatedNormalModelBuilder
from inference.sampler import InferenceSummary, NUTSSampler
from estimation.config import SamplerConfig
from estimation.errors import SamplingFailureError

logger = logging.getLogger(__name__)


class InferenceAdapter:
    """
    Runs the truncated-normal model through NUTS.

    Attributes
    ----------
    model_builder : TruncatedNormalModelBuilder
        Model handle, built once and reused for every call.
    sampler : NUTSSampler
        Sampler used to draw from the posterior.
    """

    def __init__(
        self,
        model_builder: Optional[TruncatedNormalModelBuilder] = None,
        sampler: Optional[NUTSSampler] = None,
    ) -> None:
        self.model_builder = model_builder or TruncatedNormalModelBuilder()
        self.sampler = sampler or NUTSSampler()

    def sample(
        self,
        observations: NDArray[np.float64],
        bounds: Tuple[float, float],
        init: Tuple[float, float],
        config: SamplerConfig,
    ) -> InferenceSummary:
        """
        Draw from the posterior of (mu, sigma).

        Parameters
        ----------
        observations : NDArray[np.float64]
            Validated truncated sample.
        bounds : Tuple[float, float]
            Truncation limits (a, b).
        init : Tuple[float, float]
            Starting values (mean_start, sd_start).
        config : SamplerConfig
            Options forwarded to the sampler.

        Returns
        -------
        summary : InferenceSummary
            Raw fit with pooled draws and diagnostics.

        Raises
        ------
        SamplingFailureError
            If model construction or sampling fails, or the log posterior
            is not finite.
        """
        lower, upper = bounds
        mean_start, sd_start = init
        builder = self.model_builder
        initvals = {builder.mean_name: float(mean_start), builder.sd_name: float(sd_start)}

        try:
            model = builder.build(observations, lower=lower, upper=upper)
            fit = self.sampler.sample(
                model,
                initvals=initvals,
                var_names=(builder.mean_name, builder.sd_name),
                **config.sample_kwargs(),
            )
        except Exception as exc:
            raise SamplingFailureError(f"Sampling failed: {exc}") from exc

        if fit.draws is not None and not np.all(np.isfinite(fit.draws.log_post)):
            raise SamplingFailureError("Sampler returned a non-finite log posterior")

        return fit

    def __repr__(self) -> str:
        """String representation."""
        return f"InferenceAdapter(model_builder={self.model_builder}, sampler={self.sampler})"
