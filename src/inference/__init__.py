"""
Bayesian inference layer for truncated-normal observations.

This module wraps the PyMC engine:
1. TruncatedNormalModelBuilder: Assemble the PyMC model with priors
2. NUTSSampler: Single-core NUTS sampling with divergence reporting
3. extract_draws / extract_diagnostics: Pull draws, log posterior and
   ArviZ diagnostics out of the InferenceData

**Usage:**
```python
from inference.model_builder import TruncatedNormalModelBuilder
from inference.sampler import NUTSSampler

model = TruncatedNormalModelBuilder().build(x, lower=0.0, upper=2.0)
summary = NUTSSampler().sample(model, draws=1000, tune=1000, chains=4)

summary.draws.mu          # pooled posterior draws of mu
summary.diagnostics["mu"] # mean, MCSE, Rhat, ESS
```
"""

from inference.model_builder import TruncatedNormalModelBuilder, PriorSpec
from inference.sampler import (
    NUTSSampler,
    DiagnosticsComputer,
    InferenceSummary,
    PosteriorDraws,
    ParameterDiagnostics,
    extract_draws,
    extract_diagnostics,
)

__all__ = [
    "TruncatedNormalModelBuilder",
    "PriorSpec",
    "NUTSSampler",
    "DiagnosticsComputer",
    "InferenceSummary",
    "PosteriorDraws",
    "ParameterDiagnostics",
    "extract_draws",
    "extract_diagnostics",
]
