"""Sampler configuration forwarded to the inference engine."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class SamplerConfig:
    """Configuration for one NUTS run.

    The named fields are the options the estimator knows how to forward.
    Anything else goes in ``extra`` and reaches ``pm.sample`` untouched; the
    estimator never inspects or rejects those keys. Sampling always runs on a
    single core, whatever ``extra`` says.
    """
    chains: int = 4                 # Independent chains, run one after another
    draws: int = 1000               # Samples per chain (post-burn-in)
    tune: int = 1000                # Burn-in / tuning steps per chain
    random_seed: Optional[int] = None
    target_accept: Optional[float] = None  # NUTS target; None leaves the sampler's own
    progressbar: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, **options: Any) -> "SamplerConfig":
        """Split an open keyword bag into named fields and ``extra``."""
        known = {f.name for f in fields(cls)} - {"extra"}
        named = {k: v for k, v in options.items() if k in known}
        extra = {k: v for k, v in options.items() if k not in known}
        return cls(extra=extra, **named)

    def merged(self, **options: Any) -> "SamplerConfig":
        """Return a copy with ``options`` layered on top of this config."""
        base = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        base.update(self.extra)
        base.update(options)
        return SamplerConfig.from_options(**base)

    def sample_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``NUTSSampler.sample``."""
        kwargs = dict(self.extra)
        kwargs.update(
            chains=self.chains,
            draws=self.draws,
            tune=self.tune,
            random_seed=self.random_seed,
            progressbar=self.progressbar,
        )
        if self.target_accept is not None:
            kwargs["target_accept"] = self.target_accept
        kwargs["cores"] = 1
        return kwargs
