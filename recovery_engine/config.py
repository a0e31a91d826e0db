"""
Recovery Engine — Configuration
Scoring breakpoints, risk thresholds, gene rules, and plan templates.
"""
from pathlib import Path

# ── Base paths ──────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
OUTPUT_DIR = BASE_DIR / "recovery_engine" / "output_data"
DEFAULT_REPORT_PATH = OUTPUT_DIR / "recovery_model.json"

# ── Display windows ─────────────────────────────────────────────
WINDOW_OPTIONS = (7, 14, 28)
DEFAULT_WINDOW_DAYS = 28

# ── Rolling windows for risk metrics ────────────────────────────
ACUTE_WINDOW_DAYS = 7
CHRONIC_WINDOW_DAYS = 28

# A flat, non-zero week has zero spread; report it as maximally monotonous
FLAT_LOAD_MONOTONY = 10.0

# Nearest-neighbour tolerance when a day has load but no biometrics
BIOMETRIC_MATCH_TOLERANCE_DAYS = 1

# ── Readiness scoring (linear model, not fitted) ───────────────
HRV_RANGE_MS = (35.0, 80.0)          # floor → 0, ceiling → 1
RESTING_HR_RANGE_BPM = (75.0, 45.0)  # inverted: lower HR is better
SPO2_RANGE_PCT = (94.0, 99.0)
SLEEP_RANGE_H = (6.0, 8.0)
DEEP_SLEEP_TARGET_PCT = 20.0
REM_SLEEP_TARGET_PCT = 18.0

# Sleep composite: duration vs stage quality
SLEEP_DURATION_SHARE = 0.7
SLEEP_STAGE_SHARE = 0.3

READINESS_WEIGHTS = {
    "hrv": 0.35,
    "resting_hr": 0.25,
    "sleep": 0.25,
    "spo2": 0.15,
}

# Onset/wake value meaning "not recorded"
SLEEP_TIME_SENTINEL = "00:00"

# ── Risk thresholds ─────────────────────────────────────────────
BASE_RISK_THRESHOLDS = {
    "acwr": 1.5,
    "monotony": 2.0,
    "strain": 6000.0,
}

# Genetic adjustments applied additively to BASE_RISK_THRESHOLDS
INFLAMMATION_ACWR_SHIFT = -0.1
INFLAMMATION_STRAIN_SHIFT = -500.0
STRESS_MONOTONY_SHIFT = -0.3

LOW_READINESS = 60
MODERATE_READINESS = 75

# ── Gene rules ──────────────────────────────────────────────────
# gene → genotypes that switch the trait on (exact match)
INFLAMMATION_GENOTYPES = {"TNF": "AA", "IL10": "CC"}
INFLAMMATION_ALLELE_GENE = "IL6"     # any genotype carrying the allele below
INFLAMMATION_ALLELE = "G"
STRESS_GENOTYPES = {"ADRB1": "AA", "COMT": "AA"}
CIRCADIAN_GENOTYPES = {"CLOCK": "AA", "PER3": "long"}
POWER_GENOTYPES = {"ACTN3": "RR"}

# ── Metric status bands ─────────────────────────────────────────
METRIC_BANDS = {
    "acwr": {"optimal_low": 0.8, "optimal_high": 1.3, "warning_high": 1.5, "critical_high": 2.0},
    "monotony": {"warning_high": 2.0},
}

# ── Plan templates ──────────────────────────────────────────────
PLAN_DAYS = 3

PLAN_TEMPLATES = {
    "general": {
        "recovery": {
            "focus": "Active Recovery + Skills",
            "notes": "Mobility, soft-tissue work, technical drills at low intensity.",
        },
        "power": {
            "focus": "Speed & Technical",
            "notes": "Short sprints, change-of-direction, full recoveries between reps.",
        },
        "aerobic": {
            "focus": "Aerobic Conditioning",
            "notes": "Tempo runs, aerobic intervals",
        },
        "full": {
            "focus": "Full Conditioning",
            "notes": "Sport-specific conditioning blocks with volume caps.",
        },
    },
    "rugby": {
        "recovery": {
            "focus": "Active Recovery + Skills",
            "notes": "Mobility, soft-tissue, passing drills, walkthroughs. Avoid heavy contact.",
        },
        "power": {
            "focus": "Speed & Technical",
            "notes": "Short sprints, change-of-direction, limited contact",
        },
        "aerobic": {
            "focus": "Aerobic Conditioning",
            "notes": "Tempo runs, aerobic intervals",
        },
        "full": {
            "focus": "Full Rugby Conditioning",
            "notes": "Game simulation blocks, controlled contact, scrums/lineouts with volume caps",
        },
    },
}
DEFAULT_SPORT = "general"
