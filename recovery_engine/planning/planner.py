"""
Three-day training planner.

Rule-based prescription from the latest readiness, the current risk
indicators and the athlete's genetic modifiers. Risk overrides recovery:
any breached threshold means a low-intensity day however fresh the athlete
looks. The same rule applies to each of the three days.
"""
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List

from recovery_engine.config import (
    DEFAULT_SPORT,
    LOW_READINESS,
    MODERATE_READINESS,
    PLAN_DAYS,
    PLAN_TEMPLATES,
)
from recovery_engine.data_prep.load_computer import RiskMetrics
from recovery_engine.genetics.modifiers import GeneticsModifiers, RiskThresholds

logger = logging.getLogger(__name__)

INTENSITY_LOW = "Low"
INTENSITY_MODERATE = "Moderate"
INTENSITY_HIGH = "High"


@dataclass(frozen=True)
class PlanItem:
    day: str          # ISO date of the session
    focus: str
    intensity: str    # "Low" | "Moderate" | "High"
    notes: str


def is_high_risk(risk: RiskMetrics, thresholds: RiskThresholds) -> bool:
    return (
        risk.acwr >= thresholds.acwr
        or risk.monotony >= thresholds.monotony
        or risk.strain >= thresholds.strain
    )


def _template(sport: str) -> Dict[str, Dict[str, str]]:
    if sport not in PLAN_TEMPLATES:
        logger.warning(f"No plan template for sport '{sport}', using '{DEFAULT_SPORT}'")
        return PLAN_TEMPLATES[DEFAULT_SPORT]
    return PLAN_TEMPLATES[sport]


def choose_session(
    latest_readiness: int,
    risk: RiskMetrics,
    thresholds: RiskThresholds,
    mods: GeneticsModifiers,
    sport: str = DEFAULT_SPORT,
) -> Dict[str, str]:
    """Focus, intensity and notes for one day."""
    template = _template(sport)

    if is_high_risk(risk, thresholds) or latest_readiness < LOW_READINESS:
        session = template["recovery"]
        intensity = INTENSITY_LOW
    elif latest_readiness < MODERATE_READINESS:
        session = template["power"] if mods.power_dominant else template["aerobic"]
        intensity = INTENSITY_MODERATE
    else:
        session = template["full"]
        intensity = INTENSITY_HIGH

    return {"focus": session["focus"], "intensity": intensity, "notes": session["notes"]}


def plan_next_days(
    latest_readiness: int,
    risk: RiskMetrics,
    thresholds: RiskThresholds,
    mods: GeneticsModifiers,
    as_of: date,
    sport: str = DEFAULT_SPORT,
    days: int = PLAN_DAYS,
) -> List[PlanItem]:
    """
    Plan the `days` days following `as_of` (day 1 = the day after).

    Args:
        latest_readiness: Most recent non-zero readiness in the display window
        risk: Current ACWR / monotony / strain
        thresholds: Genetically adjusted thresholds
        mods: Genetic modifiers (power_dominant picks the moderate-day focus)
        as_of: Reference "today"
        sport: Key into PLAN_TEMPLATES
    """
    session = choose_session(latest_readiness, risk, thresholds, mods, sport)
    plan = [
        PlanItem(day=(as_of + timedelta(days=i)).isoformat(), **session)
        for i in range(1, days + 1)
    ]
    logger.info(
        f"Planned {len(plan)} days from {as_of.isoformat()}: {session['intensity']} "
        f"({session['focus']}), readiness={latest_readiness}"
    )
    return plan
