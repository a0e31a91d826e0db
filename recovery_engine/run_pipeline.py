"""
Recovery Engine — Main Pipeline
Loads + biometrics + genetics → aligned timeline → readiness and risk
indicators → genotype-adjusted thresholds → 3-day plan and risk flags.

compute_recovery_model() is the in-process entry point. Running this module
does the same from JSON exports on disk and prints a summary.
"""
import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from recovery_engine.config import DEFAULT_SPORT, DEFAULT_WINDOW_DAYS, WINDOW_OPTIONS
from recovery_engine.data_prep.date_aligner import align_records, to_date_key
from recovery_engine.data_prep.load_computer import RiskMetrics, compute_risk_metrics
from recovery_engine.data_prep.timeline_builder import (
    RecoveryPoint,
    build_recovery_points,
    latest_readiness,
    points_to_frame,
    select_display_window,
)
from recovery_engine.errors import InvalidWindowError
from recovery_engine.etl.loader import (
    load_json_records,
    parse_biometrics,
    parse_daily_loads,
    parse_genetic_profile,
)
from recovery_engine.etl.records import BiometricRecord, DailyLoad, GeneticProfileEntry
from recovery_engine.genetics.modifiers import (
    GeneticsModifiers,
    RiskThresholds,
    adjust_risk_thresholds,
    extract_genetics_modifiers,
)
from recovery_engine.output.insight_generator import generate_metric_cards, generate_modifier_summary
from recovery_engine.output.report_writer import frame_to_series, save_model_json
from recovery_engine.planning.planner import PlanItem, plan_next_days
from recovery_engine.safety.flags import generate_flags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecoveryModel:
    """Everything the recovery dashboard shows for one athlete on one day."""
    as_of: str
    window_days: int
    points: List[RecoveryPoint]      # display window, oldest first
    acwr: float                      # risk indicators use the full history
    monotony: float
    strain: float
    latest_recovery: int
    mods: GeneticsModifiers
    thresholds: RiskThresholds
    plan: List[PlanItem]
    flags: List[str]

    @property
    def risk(self) -> RiskMetrics:
        return RiskMetrics(acwr=self.acwr, monotony=self.monotony, strain=self.strain)

    def to_dict(self) -> Dict:
        return asdict(self)

    def points_frame(self) -> pd.DataFrame:
        return points_to_frame(self.points)


def _as_date(value) -> date:
    return date.fromisoformat(to_date_key(value))


def compute_recovery_model(
    loads: Sequence[DailyLoad],
    biometrics: Sequence[BiometricRecord],
    genetics: Sequence[GeneticProfileEntry],
    as_of,
    window_days: int = DEFAULT_WINDOW_DAYS,
    sport: str = DEFAULT_SPORT,
) -> RecoveryModel:
    """
    Compute the full recovery model from already-fetched inputs.

    Args:
        loads: Daily training loads (any order)
        biometrics: Nightly biometric records (any order)
        genetics: Gene/genotype entries
        as_of: Reference "today"; the plan covers the three following days
        window_days: Display window, one of WINDOW_OPTIONS
        sport: Plan template key

    Raises:
        InvalidWindowError: window_days not in WINDOW_OPTIONS
        InvalidDateError: a record date (or as_of) cannot be parsed
    """
    # bool is an int subclass; floats would pass the membership test but not slice
    if (not isinstance(window_days, int) or isinstance(window_days, bool)
            or window_days not in WINDOW_OPTIONS):
        raise InvalidWindowError(window_days, WINDOW_OPTIONS)
    as_of_date = _as_date(as_of)

    aligned = align_records(loads, biometrics)
    points = build_recovery_points(aligned)
    recent = select_display_window(points, window_days)

    risk = compute_risk_metrics([p.load for p in points])
    readiness = latest_readiness(recent)

    mods = extract_genetics_modifiers(genetics)
    thresholds = adjust_risk_thresholds(mods)
    plan = plan_next_days(readiness, risk, thresholds, mods, as_of_date, sport=sport)
    flags = generate_flags(risk, thresholds, readiness)

    logger.info(
        f"Recovery model as of {as_of_date.isoformat()}: {len(points)} days, "
        f"ACWR={risk.acwr:.2f}, monotony={risk.monotony:.2f}, strain={risk.strain:.0f}, "
        f"readiness={readiness}, flags={len(flags)}"
    )

    return RecoveryModel(
        as_of=as_of_date.isoformat(),
        window_days=window_days,
        points=recent,
        acwr=risk.acwr,
        monotony=risk.monotony,
        strain=risk.strain,
        latest_recovery=readiness,
        mods=mods,
        thresholds=thresholds,
        plan=plan,
        flags=flags,
    )


def build_report(model: RecoveryModel) -> Dict:
    """Model dict plus display cards, the modifier summary and the chart series."""
    report = model.to_dict()
    report["metric_cards"] = generate_metric_cards(model.risk, model.thresholds, model.latest_recovery)
    report["genetics"] = generate_modifier_summary(model.mods)
    report["series"] = frame_to_series(model.points_frame())
    return report


def run_pipeline(
    loads_path,
    biometrics_path,
    genetics_path: Optional[str] = None,
    as_of=None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    sport: str = DEFAULT_SPORT,
    output_path=None,
) -> RecoveryModel:
    """
    Execute the pipeline from JSON exports.

    Args:
        loads_path: Training-load endpoint export
        biometrics_path: Biometric endpoint export
        genetics_path: Genetic profile export (optional)
        as_of: Reference day, defaults to today
        window_days: Display window (7, 14 or 28)
        sport: Plan template
        output_path: Write the JSON report here when given
    """
    as_of = as_of or date.today()

    print("=" * 60)
    print("RECOVERY ENGINE — Training Load & Recovery")
    print(f"  As of: {_as_date(as_of).isoformat()}   Window: {window_days}d   Sport: {sport}")
    print("=" * 60)

    print("\n▶ Phase 1: Loading data...")
    loads = parse_daily_loads(load_json_records(loads_path))
    print(f"  → {len(loads)} daily loads")
    biometrics = parse_biometrics(load_json_records(biometrics_path))
    print(f"  → {len(biometrics)} biometric records")
    genetics = parse_genetic_profile(load_json_records(genetics_path)) if genetics_path else []
    print(f"  → {len(genetics)} genetic markers")

    print("\n▶ Phase 2: Computing model...")
    model = compute_recovery_model(loads, biometrics, genetics, as_of, window_days, sport)
    print(f"  ACWR:      {model.acwr:.2f}  (threshold {model.thresholds.acwr:.2f})")
    print(f"  Monotony:  {model.monotony:.2f}  (threshold {model.thresholds.monotony:.2f})")
    print(f"  Strain:    {model.strain:.0f}  (threshold {model.thresholds.strain:.0f})")
    print(f"  Readiness: {model.latest_recovery}%")

    if model.flags:
        print("\n▶ Risk flags:")
        for flag in model.flags:
            print(f"  ! {flag}")

    print("\n▶ Plan: next 3 days")
    for item in model.plan:
        print(f"  {item.day}  {item.intensity:<8s} {item.focus} — {item.notes}")

    if output_path:
        path = save_model_json(build_report(model), output_path)
        print(f"\n  Output: {path}")
    print()

    return model


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Training load & recovery analytics")
    parser.add_argument("--loads", required=True, help="Daily training-load JSON export")
    parser.add_argument("--biometrics", required=True, help="Biometric JSON export")
    parser.add_argument("--genetics", help="Genetic profile JSON export")
    parser.add_argument("--as-of", help="Reference day YYYY-MM-DD (default: today)")
    parser.add_argument("--window", type=int, default=DEFAULT_WINDOW_DAYS, choices=WINDOW_OPTIONS,
                        help="Display window in days")
    parser.add_argument("--sport", default=DEFAULT_SPORT, help="Plan template (general, rugby)")
    parser.add_argument("--output", help="Write the JSON report to this path")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run_pipeline(
        loads_path=args.loads,
        biometrics_path=args.biometrics,
        genetics_path=args.genetics,
        as_of=args.as_of,
        window_days=args.window,
        sport=args.sport,
        output_path=args.output,
    )


if __name__ == "__main__":
    main()
