"""
Load computer — injury-risk indicators from the daily composite load history.

  ACWR      acute (7-day) mean load / chronic (28-day) mean load
            <0.8 = undertrained, 0.8-1.3 = sweet spot, >1.5 = danger zone
  Monotony  mean / std of the last 7 days. Every day the same = poor periodization
  Strain    mean 7-day load × monotony. High volume done monotonously

All three take whatever history exists: "last N" of a shorter history is the
whole history. Degenerate windows resolve to defined floors, never NaN/inf.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from recovery_engine.config import (
    ACUTE_WINDOW_DAYS,
    CHRONIC_WINDOW_DAYS,
    FLAT_LOAD_MONOTONY,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskMetrics:
    acwr: float
    monotony: float
    strain: float


# ══════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ══════════════════════════════════════════════════════════════════

def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def _last(loads: Sequence[float], n: int) -> np.ndarray:
    values = np.asarray(loads, dtype=float)
    return values[-n:] if n > 0 else values[:0]


def mean(values: Sequence[float]) -> float:
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    return float(values.mean())


def std(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for fewer than two values."""
    values = np.asarray(values, dtype=float)
    if values.size < 2:
        return 0.0
    return float(values.std(ddof=0))


# ══════════════════════════════════════════════════════════════════
# RISK METRICS
# ══════════════════════════════════════════════════════════════════

def compute_acwr(loads: Sequence[float]) -> float:
    """Acute:chronic workload ratio. 0 when the chronic mean is not positive."""
    acute = mean(_last(loads, ACUTE_WINDOW_DAYS))
    chronic = mean(_last(loads, CHRONIC_WINDOW_DAYS))
    if chronic <= 0:
        return 0.0
    return acute / chronic


def compute_monotony(loads: Sequence[float]) -> float:
    """
    Mean / std of the acute window.

    Zero spread: a flat non-zero week is maximally monotonous
    (FLAT_LOAD_MONOTONY); a flat zero week is no risk signal at all.
    """
    week = _last(loads, ACUTE_WINDOW_DAYS)
    m = mean(week)
    s = std(week)
    if s == 0:
        return FLAT_LOAD_MONOTONY if m > 0 else 0.0
    return m / s


def compute_strain(loads: Sequence[float]) -> int:
    """Mean acute load × monotony, rounded to the nearest whole unit."""
    week_mean = mean(_last(loads, ACUTE_WINDOW_DAYS))
    return round_half_up(week_mean * compute_monotony(loads))


def compute_risk_metrics(loads: Sequence[float]) -> RiskMetrics:
    """All three indicators over a load history ordered oldest → newest."""
    metrics = RiskMetrics(
        acwr=compute_acwr(loads),
        monotony=compute_monotony(loads),
        strain=float(compute_strain(loads)),
    )
    logger.debug(
        f"Risk over {len(loads)} days: ACWR={metrics.acwr:.2f}, "
        f"monotony={metrics.monotony:.2f}, strain={metrics.strain:.0f}"
    )
    return metrics


def compute_rolling_risk(loads: Sequence[float], dates: Optional[Sequence] = None) -> pd.DataFrame:
    """
    Risk indicators as of every day in the history.

    Row i uses loads[:i + 1], so the last row equals compute_risk_metrics(loads).
    """
    loads = list(loads)
    rows = []
    for i in range(len(loads)):
        metrics = compute_risk_metrics(loads[: i + 1])
        rows.append({
            "load": float(loads[i]),
            "acwr": round(metrics.acwr, 2),
            "monotony": round(metrics.monotony, 2),
            "strain": metrics.strain,
        })
    df = pd.DataFrame(rows, columns=["load", "acwr", "monotony", "strain"])
    if dates is not None:
        df.index = pd.to_datetime(list(dates))
        df.index.name = "date"
    return df
