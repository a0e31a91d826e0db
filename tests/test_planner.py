"""
Tests for the 3-day planner.
"""
from datetime import date

import pytest

from recovery_engine.data_prep.load_computer import RiskMetrics
from recovery_engine.genetics.modifiers import GeneticsModifiers, RiskThresholds
from recovery_engine.planning.planner import is_high_risk, plan_next_days

AS_OF = date(2024, 3, 10)
CALM = RiskMetrics(acwr=1.0, monotony=1.2, strain=2500)
BASE = RiskThresholds.base()


def _plan(readiness, risk=CALM, mods=GeneticsModifiers(), thresholds=BASE, **kwargs):
    return plan_next_days(readiness, risk, thresholds, mods, AS_OF, **kwargs)


class TestPlanShape:

    def test_three_days_starting_tomorrow(self):
        plan = _plan(80)
        assert [p.day for p in plan] == ["2024-03-11", "2024-03-12", "2024-03-13"]

    def test_same_session_every_day(self):
        plan = _plan(70)
        assert len({(p.focus, p.intensity, p.notes) for p in plan}) == 1


class TestRiskOverridesRecovery:

    def test_high_acwr_with_high_readiness(self):
        plan = _plan(80, risk=RiskMetrics(acwr=1.8, monotony=1.2, strain=2500))
        assert all(p.intensity == "Low" for p in plan)
        assert all(p.focus == "Active Recovery + Skills" for p in plan)

    @pytest.mark.parametrize("risk", [
        RiskMetrics(acwr=1.5, monotony=1.0, strain=100),
        RiskMetrics(acwr=1.0, monotony=2.0, strain=100),
        RiskMetrics(acwr=1.0, monotony=1.0, strain=6000),
    ])
    def test_any_threshold_reached_is_high_risk(self, risk):
        assert is_high_risk(risk, BASE)
        assert _plan(95, risk=risk)[0].intensity == "Low"

    def test_adjusted_thresholds_apply(self):
        """ACWR 1.45 is fine at base but breaches the inflammation-adjusted 1.4"""
        risk = RiskMetrics(acwr=1.45, monotony=1.0, strain=100)
        assert _plan(90, risk=risk)[0].intensity == "High"
        assert _plan(90, risk=risk, thresholds=RiskThresholds(1.4, 2.0, 5500))[0].intensity == "Low"


class TestReadinessTiers:

    def test_low_recovery(self):
        assert _plan(59)[0].intensity == "Low"

    def test_moderate_aerobic(self):
        item = _plan(60)[0]
        assert item.intensity == "Moderate"
        assert item.focus == "Aerobic Conditioning"

    def test_moderate_power_dominant(self):
        item = _plan(74, mods=GeneticsModifiers(power_dominant=True))[0]
        assert item.intensity == "Moderate"
        assert item.focus == "Speed & Technical"

    def test_high(self):
        item = _plan(75)[0]
        assert item.intensity == "High"
        assert item.focus == "Full Conditioning"

    def test_zero_readiness_is_low(self):
        assert _plan(0)[0].intensity == "Low"


class TestSportTemplates:

    def test_rugby_wording(self):
        assert _plan(90, sport="rugby")[0].focus == "Full Rugby Conditioning"
        assert "contact" in _plan(30, sport="rugby")[0].notes

    def test_unknown_sport_uses_general(self):
        assert _plan(90, sport="curling")[0].focus == "Full Conditioning"
