"""
Posterior summarization.

Reduces pooled posterior draws and engine diagnostics to one ``SummaryRow``
per parameter:

    mean      engine posterior mean
    median    0.5 quantile of the draws
    maxlp     parameter value at the draw with the highest log posterior
    se        Monte Carlo standard error of the mean
    ci_lower  (1 - ci_level) quantile
    ci_upper  ci_level quantile
    rhat      engine convergence statistic

Quantiles use linear interpolation between order statistics for both the
median and the interval ends.
"""

from typing import Mapping, Tuple

import numpy as np
from numpy.typing import NDArray

from inference.sampler import ParameterDiagnostics, PosteriorDraws
from estimation.errors import SummarizationError
from estimation.result import SummaryRow

# (row name, draws attribute, diagnostics key)
PARAMETERS = (("mean", "mu", "mu"), ("sd", "sigma", "sigma"))


def map_draw_index(log_post: NDArray[np.float64]) -> int:
    """
    Index of the draw with the highest log posterior.

    Ties resolve to the earliest draw. Non-finite values never win.
    """
    log_post = np.asarray(log_post, dtype=np.float64)
    if log_post.ndim != 1 or log_post.size == 0:
        raise SummarizationError("log_post must be a non-empty 1-D array")
    finite = np.isfinite(log_post)
    if not finite.any():
        raise SummarizationError("No draw has a finite log posterior")
    return int(np.argmax(np.where(finite, log_post, -np.inf)))


def _check_draws(draws: PosteriorDraws) -> int:
    lengths = set()
    for name in ("mu", "sigma", "log_post"):
        values = np.asarray(getattr(draws, name))
        if values.ndim != 1:
            raise SummarizationError(f"Draws of {name} must be 1-D. Got shape {values.shape}")
        lengths.add(values.shape[0])
    if len(lengths) != 1:
        raise SummarizationError(f"Draw arrays have mismatched lengths: {sorted(lengths)}")
    n = lengths.pop()
    if n == 0:
        raise SummarizationError("No posterior draws to summarize")
    return n


def summarize_posterior(
    draws: PosteriorDraws,
    diagnostics: Mapping[str, ParameterDiagnostics],
    ci_level: float = 0.95,
) -> Tuple[SummaryRow, SummaryRow]:
    """
    Build the "mean" and "sd" summary rows.

    Parameters
    ----------
    draws : PosteriorDraws
        Pooled posterior draws.
    diagnostics : Mapping[str, ParameterDiagnostics]
        Engine diagnostics keyed by "mu" and "sigma".
    ci_level : float
        Credible interval level in (0.5, 1).

    Returns
    -------
    rows : Tuple[SummaryRow, SummaryRow]
        Rows for the location ("mean") and scale ("sd").

    Raises
    ------
    SummarizationError
        If draws are empty or malformed, or diagnostics are missing.
    """
    if draws is None:
        raise SummarizationError("Inference returned no draws")
    _check_draws(draws)

    # joint MAP: one index for both parameters
    i_map = map_draw_index(draws.log_post)
    probs = [1.0 - ci_level, 0.5, ci_level]

    rows = []
    for row_name, attr, key in PARAMETERS:
        if key not in diagnostics:
            raise SummarizationError(f"Missing diagnostics for {key!r}")
        diag = diagnostics[key]
        values = np.asarray(getattr(draws, attr), dtype=np.float64)
        ci_lower, median, ci_upper = np.quantile(values, probs, method="linear")
        rows.append(
            SummaryRow(
                param=row_name,
                mean=float(diag.posterior_mean),
                median=float(median),
                maxlp=float(values[i_map]),
                se=float(diag.monte_carlo_se),
                ci_lower=float(ci_lower),
                ci_upper=float(ci_upper),
                rhat=float(diag.rhat),
            )
        )

    return rows[0], rows[1]
