"""
Risk flags.
Compares the current indicators with the athlete's adjusted thresholds and
emits human-readable flags, and classifies indicators into status bands.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from recovery_engine.config import LOW_READINESS, METRIC_BANDS
from recovery_engine.data_prep.load_computer import RiskMetrics
from recovery_engine.genetics.modifiers import RiskThresholds

logger = logging.getLogger(__name__)


@dataclass
class MetricStatus:
    """Where one risk indicator sits relative to its reference bands."""
    metric: str
    value: float
    bound_type: str       # 'within', 'near_low', 'near_high', 'above'
    severity: str         # 'ok', 'caution', 'warning', 'critical'
    message: Optional[str] = None


def generate_flags(
    risk: RiskMetrics,
    thresholds: RiskThresholds,
    latest_readiness: int,
) -> List[str]:
    """
    One flag per breached threshold, always in the order
    ACWR, Monotony, Strain, Readiness. Each flag states value and threshold.
    """
    flags = []
    if risk.acwr >= thresholds.acwr:
        flags.append(f"ACWR high ({risk.acwr:.2f} ≥ {thresholds.acwr:.2f})")
    if risk.monotony >= thresholds.monotony:
        flags.append(f"Monotony high ({risk.monotony:.2f} ≥ {thresholds.monotony:.2f})")
    if risk.strain >= thresholds.strain:
        flags.append(f"Strain high ({risk.strain:.0f} ≥ {thresholds.strain:.0f})")
    if latest_readiness < LOW_READINESS:
        flags.append(f"Low readiness ({latest_readiness} < {LOW_READINESS})")

    if flags:
        logger.info(f"{len(flags)} risk flag(s): {'; '.join(flags)}")
    return flags


def check_metric_status(metric: str, value: float) -> MetricStatus:
    """Classify an indicator against METRIC_BANDS (ACWR sweet spot 0.8-1.3)."""
    bands = METRIC_BANDS.get(metric)
    if not bands:
        return MetricStatus(metric=metric, value=value, bound_type="within", severity="ok")

    critical_high = bands.get("critical_high")
    if critical_high is not None and value > critical_high:
        return MetricStatus(
            metric=metric, value=value, bound_type="above", severity="critical",
            message=f"{metric} at {value:.2f} is far above the safe range (above {critical_high}).",
        )

    warning_high = bands.get("warning_high")
    if warning_high is not None and value > warning_high:
        return MetricStatus(
            metric=metric, value=value, bound_type="above", severity="warning",
            message=f"{metric} at {value:.2f} is in the danger zone (above {warning_high}).",
        )

    optimal_high = bands.get("optimal_high")
    if optimal_high is not None and value > optimal_high:
        return MetricStatus(
            metric=metric, value=value, bound_type="near_high", severity="caution",
            message=f"{metric} at {value:.2f} is above the optimal range (above {optimal_high}).",
        )

    # A zero ratio means no chronic history, not undertraining
    optimal_low = bands.get("optimal_low")
    if optimal_low is not None and 0 < value < optimal_low:
        return MetricStatus(
            metric=metric, value=value, bound_type="near_low", severity="caution",
            message=f"{metric} at {value:.2f} is below the optimal range (below {optimal_low}).",
        )

    return MetricStatus(metric=metric, value=value, bound_type="within", severity="ok")


def assess_risk_status(risk: RiskMetrics) -> List[MetricStatus]:
    """Status of ACWR and monotony, most severe first."""
    results = [
        check_metric_status("acwr", risk.acwr),
        check_metric_status("monotony", risk.monotony),
    ]
    severity_order = {"critical": 0, "warning": 1, "caution": 2, "ok": 3}
    results.sort(key=lambda r: severity_order.get(r.severity, 99))
    return results
