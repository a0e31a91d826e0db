"""
Upstream payload loader.
Turns raw REST payloads (mixed key casing, $values envelopes, numeric
strings) into typed input records.
"""
import json
import logging
import math
import numbers
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from recovery_engine.errors import PayloadError
from recovery_engine.etl.records import BiometricRecord, DailyLoad, GeneticProfileEntry

logger = logging.getLogger(__name__)


# Extra spellings seen on the training-load endpoint beyond camel/Pascal case
LOAD_EXTRA_ALIASES = {
    "composite_load": ("load", "Load"),
}

BIOMETRIC_TEXT_FIELDS = {"sleep_onset_time", "wake_time"}


def parse_number(raw: Any) -> Optional[float]:
    """Parse a numeric field; numbers and numeric strings pass, anything else is None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        value = float(raw)
    elif isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _aliases(name: str) -> List[str]:
    """snake_case field → [snake_case, camelCase, PascalCase] payload keys."""
    parts = name.split("_")
    camel = parts[0] + "".join(p.capitalize() for p in parts[1:])
    pascal = "".join(p.capitalize() for p in parts)
    return [name, camel, pascal]


def _pick(raw: Dict, name: str, extra: tuple = ()) -> Any:
    """First non-None value among the aliases of `name`."""
    for key in _aliases(name) + list(extra):
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def unwrap_payload(payload: Any) -> List[Dict]:
    """Accept a plain list or a {"$values": [...]} envelope."""
    if payload is None:
        return []
    if isinstance(payload, dict) and "$values" in payload:
        payload = payload["$values"]
    if not isinstance(payload, list):
        raise PayloadError(f"Expected a list of records, got {type(payload).__name__}")
    return [r for r in payload if isinstance(r, dict)]


def parse_daily_loads(payload: Any) -> List[DailyLoad]:
    """Parse the training-load endpoint payload. Missing loads count as 0."""
    records = []
    for raw in unwrap_payload(payload):
        date = _pick(raw, "date")
        if date is None:
            logger.debug(f"Skipping load record without date: {raw}")
            continue
        values = {}
        for f in fields(DailyLoad):
            if f.name == "date":
                continue
            value = parse_number(_pick(raw, f.name, LOAD_EXTRA_ALIASES.get(f.name, ())))
            if f.name.endswith("_per_min"):
                values[f.name] = value
            else:
                values[f.name] = value if value is not None else 0.0
        records.append(DailyLoad(date=date, **values))
    logger.debug(f"Parsed {len(records)} daily load records")
    return records


def parse_biometrics(payload: Any) -> List[BiometricRecord]:
    """Parse wearable biometric records. Non-numeric values become None."""
    records = []
    for raw in unwrap_payload(payload):
        date = _pick(raw, "date")
        if date is None:
            logger.debug(f"Skipping biometric record without date: {raw}")
            continue
        values = {}
        for f in fields(BiometricRecord):
            if f.name == "date":
                continue
            value = _pick(raw, f.name)
            if f.name in BIOMETRIC_TEXT_FIELDS:
                values[f.name] = str(value) if value is not None else None
            else:
                values[f.name] = parse_number(value)
        records.append(BiometricRecord(date=date, **values))
    logger.debug(f"Parsed {len(records)} biometric records")
    return records


def parse_genetic_profile(payload: Any) -> List[GeneticProfileEntry]:
    """Parse gene/genotype pairs, dropping entries without a gene name."""
    entries = []
    for raw in unwrap_payload(payload):
        gene = _pick(raw, "gene")
        genotype = _pick(raw, "genotype")
        if gene is None or str(gene).strip() == "":
            continue
        entries.append(GeneticProfileEntry(
            gene=str(gene).strip(),
            genotype="" if genotype is None else str(genotype).strip(),
        ))
    return entries


def load_json_records(path) -> List[Dict]:
    """Read a JSON export and return its records, unwrapping a $values envelope."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    records = unwrap_payload(payload)
    logger.info(f"Loaded {len(records)} records from {path}")
    return records
