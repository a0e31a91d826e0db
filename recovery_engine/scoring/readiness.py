"""
Readiness score (0-100).

Linear composite of four overnight signals. Each raw value is mapped onto
[0, 1] between a floor and a ceiling breakpoint; a missing or non-positive
value contributes nothing rather than counting as the worst case.

    score = 0.35 * HRV + 0.25 * resting HR + 0.25 * sleep + 0.15 * SpO2

Sleep is itself 70% duration and 30% stage quality (deep + REM).
An externally supplied recovery_score always takes precedence.
"""
from dataclasses import dataclass
from typing import Optional

from recovery_engine.config import (
    DEEP_SLEEP_TARGET_PCT,
    HRV_RANGE_MS,
    READINESS_WEIGHTS,
    REM_SLEEP_TARGET_PCT,
    RESTING_HR_RANGE_BPM,
    SLEEP_DURATION_SHARE,
    SLEEP_RANGE_H,
    SLEEP_STAGE_SHARE,
    SPO2_RANGE_PCT,
)
from recovery_engine.data_prep.load_computer import round_half_up
from recovery_engine.data_prep.sleep_computer import compute_sleep_hours
from recovery_engine.etl.loader import parse_number
from recovery_engine.etl.records import BiometricRecord


@dataclass
class ReadinessComponents:
    """Breakdown of each signal's contribution to the readiness score."""
    hrv_factor: float = 0.0
    resting_hr_factor: float = 0.0
    sleep_duration_factor: float = 0.0
    stage_composite: float = 0.0
    sleep_composite: float = 0.0
    spo2_factor: float = 0.0
    provided_score: Optional[float] = None   # set when the wearable supplied a score
    score: int = 0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _value(raw) -> float:
    number = parse_number(raw)
    return number if number is not None else 0.0


def _scaled(value: float, breakpoints) -> float:
    """Map value onto [0, 1] between (floor, ceiling); non-positive input → 0."""
    if value <= 0:
        return 0.0
    floor, ceiling = breakpoints
    return clamp((value - floor) / (ceiling - floor))


def compute_readiness_components(
    record: BiometricRecord,
    sleep_hours: Optional[float] = None,
) -> ReadinessComponents:
    """
    Score one biometric record and keep the per-factor breakdown.

    Args:
        record: Biometric record for the day
        sleep_hours: Pre-resolved sleep duration. Computed from the record if omitted.
    """
    provided = _value(record.recovery_score)
    if 0 < provided <= 100:
        return ReadinessComponents(provided_score=provided, score=round_half_up(provided))

    if sleep_hours is None:
        sleep_hours = compute_sleep_hours(record)

    hrv_factor = _scaled(_value(record.hrv_night), HRV_RANGE_MS)
    rhr_factor = _scaled(_value(record.resting_hr), RESTING_HR_RANGE_BPM)
    spo2_factor = _scaled(_value(record.spo2_night), SPO2_RANGE_PCT)
    sleep_duration_factor = _scaled(sleep_hours, SLEEP_RANGE_H)

    deep_pct = _value(record.deep_sleep_pct)
    rem_pct = _value(record.rem_sleep_pct)
    deep_factor = clamp(deep_pct / DEEP_SLEEP_TARGET_PCT) if deep_pct > 0 else 0.0
    rem_factor = clamp(rem_pct / REM_SLEEP_TARGET_PCT) if rem_pct > 0 else 0.0
    stage_composite = (deep_factor + rem_factor) / 2

    sleep_composite = SLEEP_DURATION_SHARE * sleep_duration_factor + SLEEP_STAGE_SHARE * stage_composite

    score = (
        hrv_factor * READINESS_WEIGHTS["hrv"]
        + rhr_factor * READINESS_WEIGHTS["resting_hr"]
        + sleep_composite * READINESS_WEIGHTS["sleep"]
        + spo2_factor * READINESS_WEIGHTS["spo2"]
    )

    return ReadinessComponents(
        hrv_factor=hrv_factor,
        resting_hr_factor=rhr_factor,
        sleep_duration_factor=sleep_duration_factor,
        stage_composite=stage_composite,
        sleep_composite=sleep_composite,
        spo2_factor=spo2_factor,
        score=round_half_up(score * 100),
    )


def compute_readiness(record: BiometricRecord, sleep_hours: Optional[float] = None) -> int:
    """Readiness score 0-100 for one biometric record."""
    return compute_readiness_components(record, sleep_hours).score
