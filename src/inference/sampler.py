"""
NUTS sampler and posterior extraction for the truncated-normal model.

Orchestrates PyMC sampling, reports the divergence rate, and pulls out what the
estimation layer needs from the resulting InferenceData:

- Posterior draws of μ and σ, pooled across chains
- Per-draw unnormalized log posterior (the NUTS ``lp`` sample stat)
- Per-parameter diagnostics from ArviZ (mean, MCSE of the mean, Rhat, ESS)

Key diagnostics:
- Rhat (potential scale reduction): <1.01 indicates convergence
- ESS (effective sample size): >400 per chain recommended
- Divergences: <2% of draws acceptable
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence
import logging
import time

import numpy as np
from numpy.typing import NDArray
import pymc as pm
import arviz as az

logger = logging.getLogger(__name__)


def _readonly(values) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class PosteriorDraws:
    """
    Posterior draws pooled across chains.

    Draws are stored chain-major: all draws of chain 0, then chain 1, etc.
    The three arrays are aligned, so index i refers to the same iteration
    in each of them.
    """

    mu: NDArray[np.float64]
    sigma: NDArray[np.float64]
    log_post: NDArray[np.float64]

    @classmethod
    def from_arrays(cls, mu, sigma, log_post) -> "PosteriorDraws":
        """Build draws from array-likes, flattening and freezing them."""
        return cls(mu=_readonly(mu), sigma=_readonly(sigma), log_post=_readonly(log_post))

    def __len__(self) -> int:
        return int(self.mu.shape[0])


@dataclass(frozen=True)
class ParameterDiagnostics:
    """Engine-side summary of a single parameter."""

    posterior_mean: float
    monte_carlo_se: float
    rhat: float
    ess_bulk: float = float("nan")


class InferenceSummary:
    """Result of one NUTS run: raw posterior plus extracted draws and diagnostics."""

    def __init__(
        self,
        idata,  # arviz.InferenceData
        n_draws: int,
        n_tune: int,
        n_chains: int,
        sampling_time: float,
        draws: Optional[PosteriorDraws] = None,
        diagnostics: Optional[Dict[str, ParameterDiagnostics]] = None,
        divergence_rate: float = 0.0,
    ) -> None:
        """
        Initialize inference summary.

        Parameters
        ----------
        idata : arviz.InferenceData
            Posterior inference data from PyMC
        n_draws : int
            Number of post-burn-in draws per chain
        n_tune : int
            Number of burn-in steps per chain
        n_chains : int
            Number of chains
        sampling_time : float
            Total sampling time (seconds)
        draws : PosteriorDraws, optional
            Pooled draws of μ, σ and the log posterior
        diagnostics : Dict[str, ParameterDiagnostics], optional
            Diagnostics keyed by parameter name ("mu", "sigma")
        divergence_rate : float
            Fraction of post-burn-in draws flagged divergent
        """
        self.idata = idata
        self.n_draws = n_draws
        self.n_tune = n_tune
        self.n_chains = n_chains
        self.sampling_time = sampling_time
        self.total_samples = n_draws * n_chains
        self.draws = draws
        self.diagnostics = dict(diagnostics or {})
        self.divergence_rate = divergence_rate

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"InferenceSummary(draws={self.n_draws}, tune={self.n_tune}, "
            f"chains={self.n_chains}, time={self.sampling_time:.1f}s)"
        )


class NUTSSampler:
    """
    NUTS sampler for the truncated-normal model.

    Runs PyMC MCMC sampling on a single core and returns an InferenceSummary
    with draws and diagnostics already extracted. Divergences are logged; a
    run is rejected for them only when ``max_divergence_rate`` is set.
    """

    def __init__(
        self,
        target_accept: float = 0.9,
        max_divergence_rate: Optional[float] = None,
    ) -> None:
        """
        Initialize sampler.

        Parameters
        ----------
        target_accept : float
            NUTS acceptance rate target (0.5-0.99), used when the caller does
            not pass one to ``sample``. Default 0.9.
        max_divergence_rate : float, optional
            Largest tolerated fraction of divergent draws. If None (default),
            divergences only produce a warning.
        """
        if not (0.5 < target_accept < 0.99):
            raise ValueError(f"target_accept must be in (0.5, 0.99). Got {target_accept}")
        if max_divergence_rate is not None and not (0.0 <= max_divergence_rate <= 1.0):
            raise ValueError(
                f"max_divergence_rate must be in [0, 1]. Got {max_divergence_rate}"
            )

        self.target_accept = target_accept
        self.max_divergence_rate = max_divergence_rate

    def sample(
        self,
        model: pm.Model,
        draws: int = 1000,
        tune: int = 1000,
        chains: int = 4,
        random_seed: Optional[int] = None,
        progressbar: bool = False,
        initvals: Optional[Mapping[str, float]] = None,
        var_names: Sequence[str] = ("mu", "sigma"),
        **kwargs: Any,
    ) -> InferenceSummary:
        """
        Run NUTS sampling on a PyMC model.

        Sampling always runs with ``cores=1``; a ``cores`` entry in ``kwargs``
        is ignored. Remaining ``kwargs`` go to ``pm.sample`` unchanged.
        ``target_accept`` falls back to the sampler's own value and ``init``
        to ``"adapt_diag"``, so chains start exactly at ``initvals``.

        Parameters
        ----------
        model : pm.Model
            PyMC model (from TruncatedNormalModelBuilder.build())
        draws : int
            Number of post-burn-in samples per chain. Default 1000.
        tune : int
            Number of burn-in steps per chain. Default 1000.
        chains : int
            Number of chains, run sequentially. Default 4.
        random_seed : int, optional
            Random seed for reproducibility.
        progressbar : bool
            Show progress bar. Default False.
        initvals : Mapping[str, float], optional
            Starting values shared by every chain.
        var_names : Sequence[str]
            Parameters to extract draws and diagnostics for.

        Returns
        -------
        summary : InferenceSummary
            Summary with posterior, draws, diagnostics, timing.

        Raises
        ------
        RuntimeError
            If ``max_divergence_rate`` is set and divergences exceed it.
        """
        if kwargs.pop("cores", None) not in (None, 1):
            logger.debug("Ignoring requested cores; sampling runs on a single core")
        if kwargs.get("target_accept") is None:
            kwargs["target_accept"] = self.target_accept
        kwargs.setdefault("init", "adapt_diag")

        start_time = time.time()

        with model:
            idata = pm.sample(
                draws=draws,
                tune=tune,
                chains=chains,
                cores=1,
                random_seed=random_seed,
                progressbar=progressbar,
                initvals=dict(initvals) if initvals is not None else None,
                return_inferencedata=True,
                discard_tuned_samples=True,
                **kwargs,
            )

        sampling_time = time.time() - start_time
        logger.debug(
            "NUTS finished: %d chains x %d draws in %.2fs", chains, draws, sampling_time
        )

        div_rate = DiagnosticsComputer.divergence_rate(idata)
        if div_rate > 0:
            n_total = idata.posterior.sizes["draw"] * idata.posterior.sizes["chain"]
            if self.max_divergence_rate is not None and div_rate > self.max_divergence_rate:
                raise RuntimeError(
                    f"Divergence rate too high: {div_rate:.1%} of {n_total} draws. "
                    f"Consider increasing tune or target_accept."
                )
            logger.warning(
                "%.1f%% of %d draws diverged; consider increasing target_accept",
                100 * div_rate,
                n_total,
            )

        mean_name, sd_name = var_names
        return InferenceSummary(
            idata=idata,
            n_draws=idata.posterior.sizes["draw"],
            n_tune=tune,
            n_chains=idata.posterior.sizes["chain"],
            sampling_time=sampling_time,
            draws=extract_draws(idata, mean_name, sd_name),
            diagnostics=extract_diagnostics(idata, var_names),
            divergence_rate=div_rate,
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"NUTSSampler(target_accept={self.target_accept}, "
            f"max_divergence_rate={self.max_divergence_rate})"
        )


class DiagnosticsComputer:
    """Convergence diagnostics computed from InferenceData."""

    @staticmethod
    def divergence_rate(idata) -> float:
        """
        Compute divergence rate from InferenceData.

        Divergences indicate areas of high curvature in parameter space
        where NUTS sampler struggles. <2% is acceptable, <0.5% is good.

        Parameters
        ----------
        idata : arviz.InferenceData
            Posterior inference data from PyMC

        Returns
        -------
        div_rate : float
            Fraction of samples that diverged [0, 1].
        """
        n_total = idata.posterior.sizes["draw"] * idata.posterior.sizes["chain"]
        if n_total == 0:
            return 0.0
        n_divergences = idata.sample_stats.diverging.sum().item()
        return float(n_divergences / n_total)


def extract_draws(idata, mean_name: str = "mu", sd_name: str = "sigma") -> PosteriorDraws:
    """
    Pool posterior draws and the per-draw log posterior across chains.

    Parameters
    ----------
    idata : arviz.InferenceData
        Posterior inference data from PyMC
    mean_name, sd_name : str
        Names of the location and scale variables in the posterior.

    Returns
    -------
    draws : PosteriorDraws
        Chain-major pooled draws.
    """
    posterior = idata.posterior
    return PosteriorDraws.from_arrays(
        mu=posterior[mean_name].values,
        sigma=posterior[sd_name].values,
        log_post=idata.sample_stats["lp"].values,
    )


def extract_diagnostics(
    idata,
    var_names: Sequence[str] = ("mu", "sigma"),
) -> Dict[str, ParameterDiagnostics]:
    """
    Per-parameter diagnostics from ``az.summary``.

    Parameters
    ----------
    idata : arviz.InferenceData
        Posterior inference data
    var_names : Sequence[str]
        Variables to summarize.

    Returns
    -------
    diagnostics : Dict[str, ParameterDiagnostics]
        Posterior mean, MCSE of the mean, Rhat and bulk ESS per variable.
    """
    summary_df = az.summary(
        idata,
        var_names=list(var_names),
        kind="all",
        round_to="none",
    )

    diagnostics = {}
    for var_name in var_names:
        diagnostics[var_name] = ParameterDiagnostics(
            posterior_mean=float(summary_df.loc[var_name, "mean"]),
            monte_carlo_se=float(summary_df.loc[var_name, "mcse_mean"]),
            rhat=float(summary_df.loc[var_name, "r_hat"]),
            ess_bulk=float(summary_df.loc[var_name, "ess_bulk"]),
        )

    return diagnostics
