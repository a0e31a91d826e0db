"""
Tests for upstream payload parsing.
"""
import json

import numpy as np
import pytest

from recovery_engine.errors import PayloadError
from recovery_engine.etl.loader import (
    load_json_records,
    parse_biometrics,
    parse_daily_loads,
    parse_genetic_profile,
    parse_number,
    unwrap_payload,
)
from recovery_engine.etl.records import GeneticProfileEntry


class TestParseNumber:

    @pytest.mark.parametrize("raw,expected", [
        (5, 5.0),
        (np.int64(5), 5.0),
        (2.5, 2.5),
        (" 7 ", 7.0),
        ("61.5", 61.5),
    ])
    def test_numeric(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, "", "abc", "nan", float("inf"), [1], {"v": 1}])
    def test_unusable(self, raw):
        assert parse_number(raw) is None


class TestUnwrapPayload:

    def test_plain_list(self):
        assert unwrap_payload([{"a": 1}]) == [{"a": 1}]

    def test_values_envelope(self):
        assert unwrap_payload({"$values": [{"a": 1}, 5, None]}) == [{"a": 1}]

    def test_none_is_empty(self):
        assert unwrap_payload(None) == []

    @pytest.mark.parametrize("payload", ["records", {"items": []}, 42])
    def test_rejects_non_list(self, payload):
        with pytest.raises(PayloadError):
            unwrap_payload(payload)


class TestParseDailyLoads:

    def test_mixed_casing_and_strings(self):
        loads = parse_daily_loads([
            {"Date": "2024-03-01", "ZoneWeightedLoad": "120.5", "compositeLoad": 300, "compositePerMin": 4.2},
        ])
        assert len(loads) == 1
        load = loads[0]
        assert load.date == "2024-03-01"
        assert load.zone_weighted_load == 120.5
        assert load.composite_load == 300.0
        assert load.metabolic_power_load == 0.0
        assert load.composite_per_min == 4.2
        assert load.metabolic_power_per_min is None

    def test_load_alias(self):
        assert parse_daily_loads([{"date": "2024-03-01", "load": 410}])[0].composite_load == 410.0

    def test_named_field_beats_alias(self):
        loads = parse_daily_loads([{"date": "2024-03-01", "compositeLoad": 200, "load": 999}])
        assert loads[0].composite_load == 200.0

    def test_unparseable_load_is_zero(self):
        assert parse_daily_loads([{"date": "2024-03-01", "compositeLoad": "n/a"}])[0].composite_load == 0.0

    def test_record_without_date_skipped(self):
        loads = parse_daily_loads({"$values": [{"compositeLoad": 100}, {"date": "2024-03-02"}]})
        assert [l.date for l in loads] == ["2024-03-02"]


class TestParseBiometrics:

    def test_fields(self):
        bio = parse_biometrics([{
            "date": "2024-03-01",
            "hrvNight": "65",
            "restingHr": "n/a",
            "spo2Night": 97,
            "sleepOnsetTime": "23:00",
            "WakeTime": "07:00",
            "recovery_score": 81,
        }])[0]
        assert bio.hrv_night == 65.0
        assert bio.resting_hr is None
        assert bio.spo2_night == 97.0
        assert bio.sleep_onset_time == "23:00"
        assert bio.wake_time == "07:00"
        assert bio.recovery_score == 81.0

    def test_missing_fields_are_none(self):
        bio = parse_biometrics([{"date": "2024-03-01"}])[0]
        assert bio.hrv_night is None
        assert bio.sleep_duration_h is None


class TestParseGeneticProfile:

    def test_entries(self):
        entries = parse_genetic_profile([
            {"Gene": " ACTN3 ", "Genotype": "RR"},
            {"gene": "", "genotype": "AA"},
            {"genotype": "AA"},
            {"gene": "COMT"},
        ])
        assert entries == [GeneticProfileEntry("ACTN3", "RR"), GeneticProfileEntry("COMT", "")]


class TestLoadJsonRecords:

    def test_reads_envelope(self, tmp_path):
        path = tmp_path / "loads.json"
        path.write_text(json.dumps({"$values": [{"date": "2024-03-01", "load": 100}]}))
        assert load_json_records(path) == [{"date": "2024-03-01", "load": 100}]

    def test_bad_shape(self, tmp_path):
        path = tmp_path / "loads.json"
        path.write_text(json.dumps({"error": "unauthorised"}))
        with pytest.raises(PayloadError):
            load_json_records(path)
