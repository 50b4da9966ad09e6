"""
Unit tests for posterior summarization.

Tests cover:
- Mean, SE and Rhat taken from engine diagnostics
- Quantile-based median and credible interval
- Joint MAP selection and tie-breaking
- Malformed or empty draws
"""

import numpy as np
import pytest

from conftest import make_fit
from inference.sampler import ParameterDiagnostics, PosteriorDraws
from estimation.errors import SummarizationError
from estimation.summary import map_draw_index, summarize_posterior


class TestSummaryRows:
    """Row contents."""

    def test_row_names_and_order(self, random_fit) -> None:
        """Rows are "mean" then "sd"."""
        rows = summarize_posterior(random_fit.draws, random_fit.diagnostics)
        assert [r.param for r in rows] == ["mean", "sd"]

    def test_diagnostics_passed_through(self) -> None:
        """mean, se and rhat come from diagnostics, not the draws."""
        diagnostics = {
            "mu": ParameterDiagnostics(posterior_mean=9.0, monte_carlo_se=0.3, rhat=1.05),
            "sigma": ParameterDiagnostics(posterior_mean=8.0, monte_carlo_se=0.2, rhat=1.01),
        }
        fit = make_fit([1.0, 2.0, 3.0], [0.1, 0.2, 0.3], [-3.0, -1.0, -2.0], diagnostics)
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics)

        assert (mean_row.mean, mean_row.se, mean_row.rhat) == (9.0, 0.3, 1.05)
        assert (sd_row.mean, sd_row.se, sd_row.rhat) == (8.0, 0.2, 1.01)

    def test_even_length_median_averages_center(self) -> None:
        """Median of an even number of draws is the mean of the two central ones."""
        fit = make_fit([4.0, 1.0, 3.0, 2.0], [1.0, 1.0, 1.0, 2.0], [0.0, 0.0, 0.0, 0.0])
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics)
        assert mean_row.median == 2.5
        assert sd_row.median == 1.0

    def test_odd_length_median(self) -> None:
        """Median of an odd number of draws is the central one."""
        fit = make_fit([5.0, 1.0, 3.0], [0.3, 0.1, 0.2], [0.0, 0.0, 0.0])
        mean_row, _ = summarize_posterior(fit.draws, fit.diagnostics)
        assert mean_row.median == 3.0

    def test_interval_uses_linear_quantiles(self) -> None:
        """Interval ends match linear-interpolation quantiles."""
        mu = np.arange(11, dtype=float)  # 0..10
        fit = make_fit(mu, mu + 1.0, np.zeros(11))
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics, ci_level=0.9)

        assert np.isclose(mean_row.ci_lower, 1.0)
        assert np.isclose(mean_row.ci_upper, 9.0)
        assert np.isclose(sd_row.ci_lower, 2.0)
        assert np.isclose(sd_row.ci_upper, 10.0)

    @pytest.mark.parametrize("ci_level", [0.55, 0.8, 0.95, 0.99])
    def test_interval_brackets_median(self, random_fit, ci_level: float) -> None:
        """ci_lower <= median <= ci_upper for every row."""
        for row in summarize_posterior(random_fit.draws, random_fit.diagnostics, ci_level):
            assert row.ci_lower <= row.median <= row.ci_upper

    def test_single_draw(self) -> None:
        """One draw collapses every quantile onto it."""
        fit = make_fit([0.7], [0.4], [-1.0])
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics)
        assert mean_row.ci_lower == mean_row.median == mean_row.ci_upper == mean_row.maxlp == 0.7
        assert sd_row.maxlp == 0.4


class TestMapDraw:
    """Joint MAP selection."""

    def test_joint_index(self) -> None:
        """Both maxlp values come from the same draw."""
        mu = [0.1, 0.2, 0.3, 0.4]
        sigma = [1.1, 1.2, 1.3, 1.4]
        log_post = [-5.0, -1.0, -3.0, -2.0]
        fit = make_fit(mu, sigma, log_post)
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics)

        i = map_draw_index(np.array(log_post))
        assert i == 1
        assert mean_row.maxlp == mu[i]
        assert sd_row.maxlp == sigma[i]

    def test_not_per_parameter_argmax(self) -> None:
        """maxlp is not the largest value of each parameter."""
        fit = make_fit([5.0, 1.0], [0.1, 9.0], [-10.0, 0.0])
        mean_row, sd_row = summarize_posterior(fit.draws, fit.diagnostics)
        assert (mean_row.maxlp, sd_row.maxlp) == (1.0, 9.0)

    def test_tie_takes_first(self) -> None:
        """Ties resolve to the earliest draw."""
        assert map_draw_index(np.array([-2.0, 0.0, -1.0, 0.0])) == 1

    def test_non_finite_ignored(self) -> None:
        """NaN log posterior never wins."""
        assert map_draw_index(np.array([np.nan, -3.0, -2.0])) == 2

    def test_all_non_finite(self) -> None:
        """No finite value is an error."""
        with pytest.raises(SummarizationError):
            map_draw_index(np.array([np.nan, -np.inf]))


class TestMalformedDraws:
    """Failures that must not produce a summary."""

    def test_empty_draws(self) -> None:
        """Zero draws raise SummarizationError."""
        fit = make_fit([], [], [])
        with pytest.raises(SummarizationError, match="No posterior draws"):
            summarize_posterior(fit.draws, fit.diagnostics)

    def test_missing_draws(self) -> None:
        """A fit without draws raises SummarizationError."""
        with pytest.raises(SummarizationError):
            summarize_posterior(None, {})

    def test_mismatched_lengths(self) -> None:
        """Draw arrays must be aligned."""
        draws = PosteriorDraws(
            mu=np.array([1.0, 2.0]), sigma=np.array([1.0]), log_post=np.array([0.0, 0.0])
        )
        with pytest.raises(SummarizationError, match="mismatched"):
            summarize_posterior(draws, {})

    def test_missing_diagnostics(self) -> None:
        """Diagnostics for both parameters are required."""
        fit = make_fit([1.0], [1.0], [0.0])
        with pytest.raises(SummarizationError, match="sigma"):
            summarize_posterior(fit.draws, {"mu": fit.diagnostics["mu"]})

    def test_is_runtime_error(self) -> None:
        """SummarizationError is a RuntimeError."""
        fit = make_fit([], [], [])
        with pytest.raises(RuntimeError):
            summarize_posterior(fit.draws, fit.diagnostics)
