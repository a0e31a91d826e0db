"""
Input records consumed by the engine.

All three arrive already fetched from the upstream services and are never
modified here. `date` is kept exactly as received (ISO string, date, datetime
or Timestamp); day-key normalization happens in data_prep.date_aligner.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class DailyLoad:
    """One day of training load for one athlete."""
    date: Any
    zone_weighted_load: float = 0.0
    metabolic_power_load: float = 0.0
    composite_load: float = 0.0         # primary signal used downstream
    zone_weighted_per_min: Optional[float] = None
    metabolic_power_per_min: Optional[float] = None
    composite_per_min: Optional[float] = None


@dataclass(frozen=True)
class BiometricRecord:
    """One night of wearable biometrics for one athlete."""
    date: Any
    hrv_night: Optional[float] = None          # ms
    resting_hr: Optional[float] = None         # bpm
    spo2_night: Optional[float] = None         # %
    sleep_duration_h: Optional[float] = None
    sleep_onset_time: Optional[str] = None     # "HH:MM"
    wake_time: Optional[str] = None            # "HH:MM"
    deep_sleep_pct: Optional[float] = None
    rem_sleep_pct: Optional[float] = None
    recovery_score: Optional[float] = None     # externally supplied, (0, 100]
    # Carried through from the ingestion pipeline, unused in scoring
    resp_rate_night: Optional[float] = None
    light_sleep_pct: Optional[float] = None
    temp_trend_c: Optional[float] = None
    training_load_pct: Optional[float] = None


@dataclass(frozen=True)
class GeneticProfileEntry:
    gene: str
    genotype: str
