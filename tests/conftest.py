"""
Shared fixtures for estimation tests.

``FakeAdapter`` stands in for the PyMC adapter: it records every call and
returns fixed draws, so the pipeline can be tested without sampling.
"""

import numpy as np
import pytest

from inference.sampler import InferenceSummary, ParameterDiagnostics, PosteriorDraws


class FakeAdapter:
    """Inference adapter returning a prepared fit."""

    def __init__(self, fit=None, error=None):
        self.fit = fit
        self.error = error
        self.calls = []

    def sample(self, observations, bounds, init, config):
        self.calls.append(
            {"observations": observations, "bounds": bounds, "init": init, "config": config}
        )
        if self.error is not None:
            raise self.error
        return self.fit


def make_fit(mu, sigma, log_post, diagnostics=None, n_chains=1):
    """InferenceSummary with the given draws and simple diagnostics."""
    draws = PosteriorDraws.from_arrays(mu=mu, sigma=sigma, log_post=log_post)
    if diagnostics is None:
        diagnostics = {
            "mu": ParameterDiagnostics(
                posterior_mean=float(np.mean(draws.mu)) if len(draws) else float("nan"),
                monte_carlo_se=0.01,
                rhat=1.0,
            ),
            "sigma": ParameterDiagnostics(
                posterior_mean=float(np.mean(draws.sigma)) if len(draws) else float("nan"),
                monte_carlo_se=0.005,
                rhat=1.002,
            ),
        }
    n_draws = len(draws) // n_chains if n_chains else 0
    return InferenceSummary(
        idata=None,
        n_draws=n_draws,
        n_tune=0,
        n_chains=n_chains,
        sampling_time=0.0,
        draws=draws,
        diagnostics=diagnostics,
    )


@pytest.fixture
def random_fit():
    """Fit with 1000 pseudo-posterior draws."""
    rng = np.random.default_rng(42)
    mu = rng.normal(0.5, 0.1, 1000)
    sigma = np.abs(rng.normal(0.5, 0.05, 1000))
    log_post = -((mu - 0.5) ** 2) / 0.02 - ((sigma - 0.5) ** 2) / 0.005
    return make_fit(mu, sigma, log_post)


@pytest.fixture
def fake_adapter(random_fit):
    """FakeAdapter returning ``random_fit``."""
    return FakeAdapter(fit=random_fit)


@pytest.fixture
def observations():
    """Small valid sample on [0, 2]."""
    return np.array([0.1, 0.35, 0.5, 0.62, 0.8, 1.1, 1.6])
