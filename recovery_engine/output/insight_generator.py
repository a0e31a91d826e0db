"""
Insight generator.
Turns the computed indicators into display cards: formatted value,
threshold, plain-language explanation and status severity.
"""
from typing import Dict, List

from recovery_engine.config import LOW_READINESS
from recovery_engine.data_prep.load_computer import RiskMetrics
from recovery_engine.genetics.modifiers import GeneticsModifiers, RiskThresholds, describe_modifiers
from recovery_engine.safety.flags import check_metric_status


METRIC_TEMPLATES = {
    "acwr": {
        "title": "ACWR (7d/28d)",
        "explanation": (
            "Acute: avg last 7 days load. Chronic: avg last 28 days load. "
            "ACWR = Acute / Chronic. Aim ≈ 0.8–1.3; spikes (>1.5) increase injury risk."
        ),
    },
    "monotony": {
        "title": "Monotony (7d)",
        "explanation": (
            "Monotony = Mean(7d load) ÷ SD(7d load). Higher values mean repetitive "
            "loading; >2.0 suggests increased injury risk."
        ),
    },
    "strain": {
        "title": "Strain (7d mean × monotony)",
        "explanation": (
            "Strain reflects total stress: Mean(7d load) × Monotony. High strain means "
            "high overall workload with low day-to-day variety."
        ),
    },
    "readiness": {
        "title": "Latest Readiness",
        "explanation": (
            "Readiness combines HRV, Resting HR, Sleep hours, and SpO₂ into 0–100. "
            "Higher indicates better recovery capacity."
        ),
    },
}


def _ratio_severity(metric: str, value: float, threshold: float) -> str:
    """
    Card severity for ACWR / monotony.

    A value at or above the athlete's (genotype-adjusted) threshold is at
    least a warning, matching the flags. Below it the reference bands only
    distinguish ok from caution.
    """
    band = check_metric_status(metric, value).severity
    if value >= threshold:
        return "critical" if band == "critical" else "warning"
    return "caution" if band != "ok" else "ok"


def generate_metric_cards(
    risk: RiskMetrics,
    thresholds: RiskThresholds,
    latest_readiness: int,
) -> List[Dict]:
    """One card per indicator, in display order."""
    acwr = METRIC_TEMPLATES["acwr"]
    monotony = METRIC_TEMPLATES["monotony"]
    strain = METRIC_TEMPLATES["strain"]
    readiness = METRIC_TEMPLATES["readiness"]

    return [
        {
            "key": "acwr",
            "title": acwr["title"],
            "value": f"{risk.acwr:.2f}",
            "threshold": f"{thresholds.acwr:.2f}",
            "explanation": acwr["explanation"],
            "severity": _ratio_severity("acwr", risk.acwr, thresholds.acwr),
        },
        {
            "key": "monotony",
            "title": monotony["title"],
            "value": f"{risk.monotony:.2f}",
            "threshold": f"{thresholds.monotony:.2f}",
            "explanation": monotony["explanation"],
            "severity": _ratio_severity("monotony", risk.monotony, thresholds.monotony),
        },
        {
            "key": "strain",
            "title": strain["title"],
            "value": f"{risk.strain:.0f}",
            "threshold": f"{thresholds.strain:.0f}",
            "explanation": strain["explanation"],
            "severity": "warning" if risk.strain >= thresholds.strain else "ok",
        },
        {
            "key": "readiness",
            "title": readiness["title"],
            "value": f"{latest_readiness}%",
            "threshold": "Higher is better",
            "explanation": readiness["explanation"],
            "severity": "warning" if latest_readiness < LOW_READINESS else "ok",
        },
    ]


def generate_modifier_summary(mods: GeneticsModifiers) -> Dict:
    return {
        "modifiers": describe_modifiers(mods),
        "note": "Thresholds are automatically adjusted by genetics to personalize risk.",
    }
