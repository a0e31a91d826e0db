"""
Daily recovery timeline.

Turns aligned load/biometric days into one RecoveryPoint per calendar day:
composite load, readiness, sleep hours, HRV and resting HR. Days without a
usable biometric record get zeros, never an error.
"""
import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence

import pandas as pd

from recovery_engine.data_prep.date_aligner import AlignedDay
from recovery_engine.data_prep.sleep_computer import compute_sleep_hours
from recovery_engine.etl.loader import parse_number
from recovery_engine.scoring.readiness import compute_readiness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecoveryPoint:
    date: str
    load: float
    recovery: int          # 0-100
    sleep_hours: float
    hrv: float
    resting_hr: float


def _number_or_zero(raw) -> float:
    value = parse_number(raw)
    return value if value is not None else 0.0


def build_recovery_points(aligned: Sequence[AlignedDay]) -> List[RecoveryPoint]:
    """One RecoveryPoint per aligned day, oldest first."""
    points = []
    for day in aligned:
        load = _number_or_zero(day.load.composite_load) if day.load is not None else 0.0
        bio = day.biometric
        if bio is None:
            points.append(RecoveryPoint(day.date, load, 0, 0.0, 0.0, 0.0))
            continue

        sleep_hours = compute_sleep_hours(bio)
        points.append(RecoveryPoint(
            date=day.date,
            load=load,
            recovery=compute_readiness(bio, sleep_hours),
            sleep_hours=sleep_hours,
            hrv=_number_or_zero(bio.hrv_night),
            resting_hr=_number_or_zero(bio.resting_hr),
        ))
    return points


def select_display_window(points: Sequence[RecoveryPoint], window_days: int) -> List[RecoveryPoint]:
    """The most recent `window_days` points (fewer if the history is shorter)."""
    if window_days <= 0:
        return []
    return list(points[-window_days:])


def latest_readiness(points: Sequence[RecoveryPoint]) -> int:
    """
    Most recent non-zero readiness in `points`, or 0.

    The biometric feed often lags the load feed by a day, so today's point
    can carry load with a zero readiness; skip back to the last real score.
    """
    for point in reversed(points):
        if point.recovery > 0:
            return point.recovery
    return 0


def points_to_frame(points: Sequence[RecoveryPoint]) -> pd.DataFrame:
    """Points as a DataFrame indexed by date, for charting and export."""
    columns = ["date", "load", "recovery", "sleep_hours", "hrv", "resting_hr"]
    df = pd.DataFrame([asdict(p) for p in points], columns=columns)
    df["date"] = pd.to_datetime(df["date"])
    return df.set_index("date")
