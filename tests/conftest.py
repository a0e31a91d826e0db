"""
Pytest configuration and shared fixtures.

Builders return plain input records so each test spells out only the
fields it cares about.
"""
from datetime import date, timedelta

import pytest

from recovery_engine.etl.records import BiometricRecord, DailyLoad, GeneticProfileEntry


START = date(2024, 2, 1)


@pytest.fixture
def day():
    """day(i) → ISO date string i days after 2024-02-01."""
    def _day(offset: int) -> str:
        return (START + timedelta(days=offset)).isoformat()
    return _day


@pytest.fixture
def make_loads(day):
    """Consecutive daily loads starting 2024-02-01."""
    def _make(values, start: int = 0):
        return [DailyLoad(date=day(start + i), composite_load=float(v)) for i, v in enumerate(values)]
    return _make


@pytest.fixture
def make_biometrics(day):
    """`count` identical nightly records starting 2024-02-01."""
    def _make(count: int, start: int = 0, **fields):
        return [BiometricRecord(date=day(start + i), **fields) for i in range(count)]
    return _make


@pytest.fixture
def healthy_night():
    """Fields for a good night: HRV 70, resting HR 55, 8h sleep, SpO2 98."""
    return {"hrv_night": 70.0, "resting_hr": 55.0, "sleep_duration_h": 8.0, "spo2_night": 98.0}


@pytest.fixture
def genes():
    def _make(**pairs):
        return [GeneticProfileEntry(gene=g, genotype=t) for g, t in pairs.items()]
    return _make
