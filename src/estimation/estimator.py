"""
Bayesian estimation of normal parameters from truncated data.

Pipeline, run once per call:

    validate_inputs -> InferenceAdapter.sample -> summarize_posterior -> assemble_result

Either a full ``EstimationResult`` comes back or an exception is raised;
there are no partial results.

**Usage:**
```python
from simulation.simulator import TruncatedNormalSimulator
from estimation import estimate

x = TruncatedNormalSimulator(a=0, b=2).sample(100, mean=0.5, sd=0.5, random_seed=1)
result = estimate(x, a=0, b=2, random_seed=1)
result.to_dataframe()
```
"""

from typing import Any, Optional
import logging

from numpy.typing import ArrayLike

from inference.model_builder import TruncatedNormalModelBuilder
from estimation.adapter import InferenceAdapter
from estimation.config import SamplerConfig
from estimation.result import EstimationResult, assemble_result
from estimation.summary import summarize_posterior
from estimation.validation import validate_inputs

logger = logging.getLogger(__name__)


class TruncatedNormalEstimator:
    """
    Estimates mu and sigma of a normal distribution observed on [a, b].

    Holds no per-call state; one instance can serve any number of calls,
    including concurrent ones.
    """

    def __init__(
        self,
        adapter: Optional[InferenceAdapter] = None,
        config: Optional[SamplerConfig] = None,
    ) -> None:
        """
        Parameters
        ----------
        adapter : InferenceAdapter, optional
            Inference backend. Anything with a compatible ``sample`` method
            works, which is how tests substitute fixed draws.
        config : SamplerConfig, optional
            Default sampler configuration for every call.
        """
        self.adapter = adapter or InferenceAdapter()
        self.config = config or SamplerConfig()

    def estimate(
        self,
        x: ArrayLike,
        a: float,
        b: float,
        mean_start: float = 0.0,
        sd_start: float = 1.0,
        ci_level: float = 0.95,
        config: Optional[SamplerConfig] = None,
        **sampler_options: Any,
    ) -> EstimationResult:
        """
        Estimate the posterior of (mu, sigma) from truncated observations.

        Parameters
        ----------
        x : ArrayLike
            Observations from the truncated normal.
        a, b : float
            Left and right truncation limits.
        mean_start : float
            Initial value for mu. Default 0.
        sd_start : float
            Initial value for sigma. Default 1.
        ci_level : float
            Number in (0.5, 1). The interval spans the (1 - ci_level) and
            ci_level quantiles. Default 0.95.
        config : SamplerConfig, optional
            Sampler configuration for this call. Defaults to the estimator's.
        **sampler_options
            Extra options layered on top of ``config`` (e.g. ``chains``,
            ``draws``, ``random_seed``). Unknown keys are passed to the
            sampler unchanged.

        Returns
        -------
        result : EstimationResult
            Rows "mean" and "sd" plus the raw fit.
        """
        observations = validate_inputs(x, a, b, sd_start=sd_start, ci_level=ci_level)

        run_config = config or self.config
        if sampler_options:
            run_config = run_config.merged(**sampler_options)

        logger.info(
            "Estimating truncated normal: n=%d, bounds=[%s, %s], chains=%d, draws=%d",
            observations.size, a, b, run_config.chains, run_config.draws,
        )
        logger.debug("Sampler config: %s", run_config)

        fit = self.adapter.sample(
            observations,
            bounds=(a, b),
            init=(mean_start, sd_start),
            config=run_config,
        )

        rows = summarize_posterior(
            getattr(fit, "draws", None),
            getattr(fit, "diagnostics", {}),
            ci_level=ci_level,
        )
        result = assemble_result(rows, fit)

        if not result.converged():
            logger.warning(
                "Rhat above 1.01: %s",
                ", ".join(f"{s.param}={s.rhat:.3f}" for s in result.stats),
            )
        logger.info("Estimation finished: %r", result)

        return result

    def __repr__(self) -> str:
        """String representation."""
        return f"TruncatedNormalEstimator(adapter={self.adapter}, config={self.config})"


_default_estimator = TruncatedNormalEstimator(
    InferenceAdapter(model_builder=TruncatedNormalModelBuilder())
)


def estimate(
    x: ArrayLike,
    a: float,
    b: float,
    mean_start: float = 0.0,
    sd_start: float = 1.0,
    ci_level: float = 0.95,
    config: Optional[SamplerConfig] = None,
    **sampler_options: Any,
) -> EstimationResult:
    """Estimate with the default estimator. See ``TruncatedNormalEstimator.estimate``."""
    return _default_estimator.estimate(
        x,
        a,
        b,
        mean_start=mean_start,
        sd_start=sd_start,
        ci_level=ci_level,
        config=config,
        **sampler_options,
    )
