"""
Sleep duration from a biometric record.

Wearables report sleep either as a duration or as onset/wake clock times.
The reported duration wins; clock times are the fallback.
"""
from typing import Optional

from recovery_engine.config import SLEEP_TIME_SENTINEL
from recovery_engine.etl.loader import parse_number
from recovery_engine.etl.records import BiometricRecord

MINUTES_PER_DAY = 24 * 60


def _clock_to_minutes(val) -> Optional[int]:
    """Convert an "HH:MM" (or "HH:MM:SS") clock time to minutes after midnight."""
    if not isinstance(val, str) or val.strip() == "" or val.strip() == SLEEP_TIME_SENTINEL:
        return None
    parts = val.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]) * 60 + int(parts[1])
    except ValueError:
        return None


def compute_sleep_hours(record: BiometricRecord) -> float:
    """
    Hours slept for one record.

    1. sleep_duration_h when it is a positive number (numeric strings accepted)
    2. wake_time − sleep_onset_time, wrapping past midnight
    3. 0 when neither is usable
    """
    duration = parse_number(record.sleep_duration_h)
    if duration is not None and duration > 0:
        return duration

    onset = _clock_to_minutes(record.sleep_onset_time)
    wake = _clock_to_minutes(record.wake_time)
    if onset is None or wake is None:
        return 0.0

    minutes = wake - onset
    if minutes < 0:
        minutes += MINUTES_PER_DAY  # slept across midnight
    return max(0, minutes) / 60
