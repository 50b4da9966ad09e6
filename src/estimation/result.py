"""
Result types returned by the estimator.

``EstimationResult`` owns a fixed two-row statistics table (one row for the
location, one for the scale) and keeps a reference to the raw fit so callers
can run further diagnostics without sampling again.
"""

from dataclasses import astuple, dataclass, fields
from typing import Any, Sequence, Tuple

import numpy as np
import pandas as pd

from estimation.errors import SummarizationError

PARAM_NAMES = ("mean", "sd")


@dataclass(frozen=True)
class SummaryRow:
    """Posterior summary of one parameter."""

    param: str
    mean: float
    median: float
    maxlp: float
    se: float
    ci_lower: float
    ci_upper: float
    rhat: float


COLUMNS = tuple(f.name for f in fields(SummaryRow))


@dataclass(frozen=True)
class EstimationResult:
    """
    Output of ``TruncatedNormalEstimator.estimate``.

    Attributes
    ----------
    stats : Tuple[SummaryRow, SummaryRow]
        Rows for "mean" and "sd", in that order.
    fit : Any
        Raw fit from the inference adapter (an ``InferenceSummary`` holding
        the ArviZ InferenceData). Exposed as-is.
    """

    stats: Tuple[SummaryRow, SummaryRow]
    fit: Any

    def row(self, param: str) -> SummaryRow:
        """Return the row for ``"mean"`` or ``"sd"``."""
        for stat in self.stats:
            if stat.param == param:
                return stat
        raise KeyError(f"No row for parameter {param!r}. Expected one of {PARAM_NAMES}")

    def to_dataframe(self) -> pd.DataFrame:
        """Statistics table as a DataFrame with one row per parameter."""
        return pd.DataFrame([astuple(stat) for stat in self.stats], columns=list(COLUMNS))

    def converged(self, rhat_threshold: float = 1.01) -> bool:
        """True if every Rhat is finite and below ``rhat_threshold``."""
        rhats = np.array([stat.rhat for stat in self.stats], dtype=np.float64)
        return bool(np.all(np.isfinite(rhats)) and np.all(rhats < rhat_threshold))

    def __repr__(self) -> str:
        """String representation."""
        body = ", ".join(
            f"{s.param}={s.mean:.4g} [{s.ci_lower:.4g}, {s.ci_upper:.4g}]" for s in self.stats
        )
        return f"EstimationResult({body})"


def assemble_result(rows: Sequence[SummaryRow], fit: Any) -> EstimationResult:
    """
    Package summary rows and the raw fit.

    Raises
    ------
    SummarizationError
        If ``rows`` is not exactly one "mean" row followed by one "sd" row.
    """
    rows = tuple(rows)
    if tuple(r.param for r in rows) != PARAM_NAMES:
        raise SummarizationError(
            f"Expected rows for {PARAM_NAMES}. Got {tuple(r.param for r in rows)}"
        )
    return EstimationResult(stats=rows, fit=fit)
