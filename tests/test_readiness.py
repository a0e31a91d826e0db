"""
Tests for the readiness score.

Breakpoints: HRV 35→80 ms, resting HR 75→45 bpm, sleep 6→8 h,
SpO2 94→99 %, deep sleep target 20 %, REM target 18 %.
"""
import pytest

from recovery_engine.etl.records import BiometricRecord
from recovery_engine.scoring.readiness import compute_readiness, compute_readiness_components


def _record(**fields):
    return BiometricRecord(date="2024-03-01", **fields)


class TestComputedScore:

    def test_healthy_night_without_stages(self, healthy_night):
        """0.35*0.778 + 0.25*0.667 + 0.25*0.7 + 0.15*0.8 = 0.734"""
        assert compute_readiness(_record(**healthy_night)) == 73

    def test_stage_quality_lifts_sleep_component(self, healthy_night):
        record = _record(**healthy_night, deep_sleep_pct=20, rem_sleep_pct=18)
        assert compute_readiness(record) == 81

    def test_all_factors_at_ceiling(self):
        record = _record(
            hrv_night=95, resting_hr=40, sleep_duration_h=9.5, spo2_night=100,
            deep_sleep_pct=30, rem_sleep_pct=25,
        )
        assert compute_readiness(record) == 100

    def test_empty_record_scores_zero(self):
        assert compute_readiness(_record()) == 0

    def test_poor_values_clamp_to_zero(self):
        record = _record(hrv_night=20, resting_hr=90, sleep_duration_h=4, spo2_night=90)
        assert compute_readiness(record) == 0

    def test_missing_signal_contributes_nothing(self):
        """Resting HR 0 is 'no reading', not a perfect heart rate"""
        components = compute_readiness_components(_record(resting_hr=0, hrv_night=80))
        assert components.resting_hr_factor == 0.0
        assert components.hrv_factor == 1.0
        assert components.score == 35

    def test_non_numeric_fields_treated_as_absent(self):
        record = _record(hrv_night="n/a", resting_hr="55", spo2_night=None)
        components = compute_readiness_components(record)
        assert components.hrv_factor == 0.0
        assert components.resting_hr_factor == pytest.approx(20 / 30)

    def test_sleep_hours_override(self, healthy_night):
        record = _record(**{**healthy_night, "sleep_duration_h": None})
        assert compute_readiness(record, sleep_hours=8.0) == 73
        assert compute_readiness(record) == 56  # no sleep signal at all

    def test_sleep_from_clock_times_when_not_given(self):
        record = _record(sleep_onset_time="23:00", wake_time="07:00")
        components = compute_readiness_components(record)
        assert components.sleep_duration_factor == 1.0
        assert components.sleep_composite == pytest.approx(0.7)
        assert components.score > 0


class TestProvidedScore:

    def test_provided_score_wins(self, healthy_night):
        components = compute_readiness_components(_record(**healthy_night, recovery_score=42))
        assert components.score == 42
        assert components.provided_score == 42

    def test_provided_score_rounds_half_up(self):
        assert compute_readiness(_record(recovery_score=62.5)) == 63
        assert compute_readiness(_record(recovery_score=62.4)) == 62

    @pytest.mark.parametrize("provided", [0, -5, 100.5, 250])
    def test_out_of_range_score_ignored(self, healthy_night, provided):
        assert compute_readiness(_record(**healthy_night, recovery_score=provided)) == 73


class TestBounds:

    @pytest.mark.parametrize("hrv,rhr,sleep,spo2", [
        (0, 0, 0, 0),
        (35, 75, 6, 94),
        (57.5, 60, 7, 96.5),
        (200, 20, 14, 100),
        (80, 45, 8, 99),
    ])
    def test_score_within_0_100(self, hrv, rhr, sleep, spo2):
        score = compute_readiness(_record(hrv_night=hrv, resting_hr=rhr, sleep_duration_h=sleep, spo2_night=spo2))
        assert 0 <= score <= 100
        assert isinstance(score, int)
