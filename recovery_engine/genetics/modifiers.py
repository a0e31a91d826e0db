"""
Genotype modifiers and personalized risk thresholds.

A handful of markers flag athletes who tolerate load spikes or repetitive
training worse than the population default. Each flag shifts one or more
risk thresholds additively:

  inflammation_sensitive  (IL6 G carrier, TNF AA, IL10 CC)  ACWR −0.1, strain −500
  stress_sensitive        (ADRB1 AA, COMT AA)               monotony −0.3
  circadian_sensitive     (CLOCK AA, PER3 long)             no threshold change
  power_dominant          (ACTN3 RR)                        planner focus only

Shifts are not clamped: stacked sensitivities can push a threshold very low.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from recovery_engine.config import (
    BASE_RISK_THRESHOLDS,
    CIRCADIAN_GENOTYPES,
    INFLAMMATION_ACWR_SHIFT,
    INFLAMMATION_ALLELE,
    INFLAMMATION_ALLELE_GENE,
    INFLAMMATION_GENOTYPES,
    INFLAMMATION_STRAIN_SHIFT,
    POWER_GENOTYPES,
    STRESS_GENOTYPES,
    STRESS_MONOTONY_SHIFT,
)
from recovery_engine.etl.records import GeneticProfileEntry


@dataclass(frozen=True)
class GeneticsModifiers:
    inflammation_sensitive: bool = False
    stress_sensitive: bool = False
    circadian_sensitive: bool = False
    power_dominant: bool = False


@dataclass(frozen=True)
class RiskThresholds:
    acwr: float
    monotony: float
    strain: float

    @classmethod
    def base(cls) -> "RiskThresholds":
        return cls(**BASE_RISK_THRESHOLDS)


MODIFIER_LABELS = {
    "inflammation_sensitive": "Inflammation sensitivity",
    "stress_sensitive": "Stress sensitivity",
    "circadian_sensitive": "Circadian sensitivity",
    "power_dominant": "Power-dominant (ACTN3 RR)",
}


def build_genotype_lookup(genetics: Sequence[GeneticProfileEntry]) -> Mapping[str, str]:
    """Read-only GENE → genotype map; gene names upper-cased, last entry wins."""
    lookup: Dict[str, str] = {}
    for entry in genetics or []:
        lookup[str(entry.gene).upper()] = str(entry.genotype)
    return MappingProxyType(lookup)


def _matches_any(lookup: Mapping[str, str], rules: Mapping[str, str]) -> bool:
    return any(lookup.get(gene) == genotype for gene, genotype in rules.items())


def extract_genetics_modifiers(genetics: Sequence[GeneticProfileEntry]) -> GeneticsModifiers:
    """Derive the four trait flags from a genetic profile. Absent genes never match."""
    lookup = build_genotype_lookup(genetics)

    # IL6: any genotype carrying the allele counts
    il6 = lookup.get(INFLAMMATION_ALLELE_GENE)
    il6_carrier = il6 is not None and INFLAMMATION_ALLELE in il6

    return GeneticsModifiers(
        inflammation_sensitive=il6_carrier or _matches_any(lookup, INFLAMMATION_GENOTYPES),
        stress_sensitive=_matches_any(lookup, STRESS_GENOTYPES),
        circadian_sensitive=_matches_any(lookup, CIRCADIAN_GENOTYPES),
        power_dominant=_matches_any(lookup, POWER_GENOTYPES),
    )


def adjust_risk_thresholds(
    mods: GeneticsModifiers,
    base: Optional[RiskThresholds] = None,
) -> RiskThresholds:
    """Shift base thresholds by the athlete's genetic flags."""
    base = base or RiskThresholds.base()
    acwr, monotony, strain = base.acwr, base.monotony, base.strain

    if mods.inflammation_sensitive:
        acwr += INFLAMMATION_ACWR_SHIFT
        strain += INFLAMMATION_STRAIN_SHIFT
    if mods.stress_sensitive:
        monotony += STRESS_MONOTONY_SHIFT
    # circadian_sensitive: reserved for sleep-aware planning, no threshold shift

    return RiskThresholds(acwr=acwr, monotony=monotony, strain=strain)


def describe_modifiers(mods: GeneticsModifiers) -> Dict[str, str]:
    """Label → "Yes"/"No" for each modifier, in display order."""
    return {
        label: "Yes" if getattr(mods, name) else "No"
        for name, label in MODIFIER_LABELS.items()
    }
