"""
Date alignment.

Normalizes the date fields of load and biometric records to calendar-day
keys (ISO YYYY-MM-DD) and pairs them up per day. Load and biometric feeds
run on different schedules, so a day with load but no biometrics borrows the
nearest biometric record within BIOMETRIC_MATCH_TOLERANCE_DAYS.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from recovery_engine.config import BIOMETRIC_MATCH_TOLERANCE_DAYS
from recovery_engine.errors import InvalidDateError
from recovery_engine.etl.records import BiometricRecord, DailyLoad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignedDay:
    """Load and biometric inputs paired for one calendar day."""
    date: str
    load: Optional[DailyLoad]
    biometric: Optional[BiometricRecord]
    biometric_is_exact: bool = False


def to_date_key(value) -> str:
    """
    Canonical calendar-day key for a date-like value.

    Timezone-aware values are converted to UTC before truncation; naive
    values and plain dates are taken as calendar dates.
    """
    if isinstance(value, datetime):
        ts = pd.Timestamp(value)
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, str):
        try:
            ts = pd.Timestamp(value.strip())
        except (ValueError, TypeError, OverflowError):
            raise InvalidDateError(value) from None
    else:
        raise InvalidDateError(value)

    if pd.isna(ts):
        raise InvalidDateError(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return ts.strftime("%Y-%m-%d")


def _day_number(date_key: str) -> int:
    return date.fromisoformat(date_key).toordinal()


def _nearest_biometric(
    date_key: str,
    bio_sorted: Sequence[Tuple[str, BiometricRecord]],
    tolerance_days: int,
) -> Optional[BiometricRecord]:
    """Closest record within tolerance; on equal distance the first scanned wins."""
    target = _day_number(date_key)
    best = None
    best_diff = None
    for key, record in bio_sorted:
        diff = abs(_day_number(key) - target)
        if diff > tolerance_days:
            continue
        if best_diff is None or diff < best_diff:
            best, best_diff = record, diff
    return best


def align_records(
    loads: Sequence[DailyLoad],
    biometrics: Sequence[BiometricRecord],
    tolerance_days: int = BIOMETRIC_MATCH_TOLERANCE_DAYS,
) -> List[AlignedDay]:
    """
    Pair loads and biometrics over the union of their days, oldest first.

    Duplicate records for the same day: the last one wins.
    """
    loads_by_day: Dict[str, DailyLoad] = {}
    for record in loads:
        loads_by_day[to_date_key(record.date)] = record

    # Stable sort keeps input order among records of the same day
    bio_sorted = sorted(
        ((to_date_key(record.date), record) for record in biometrics),
        key=lambda pair: pair[0],
    )
    bio_by_day: Dict[str, BiometricRecord] = {}
    for key, record in bio_sorted:
        bio_by_day[key] = record

    all_days = sorted(set(loads_by_day) | set(bio_by_day))

    aligned = []
    borrowed = 0
    for day in all_days:
        if day in bio_by_day:
            aligned.append(AlignedDay(day, loads_by_day.get(day), bio_by_day[day], True))
            continue
        nearest = _nearest_biometric(day, bio_sorted, tolerance_days)
        if nearest is not None:
            borrowed += 1
        aligned.append(AlignedDay(day, loads_by_day.get(day), nearest, False))

    logger.debug(
        f"Aligned {len(all_days)} days from {len(loads)} loads and "
        f"{len(biometrics)} biometric records ({borrowed} borrowed from a neighbour day)"
    )
    return aligned
