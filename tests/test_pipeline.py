"""
Tests for the raw -> clean record pipeline.
"""

import pandas as pd
import pytest

from stormreport.constants import CLEAN_COLUMNS
from stormreport.pipeline import clean_records, resolve_damage
from stormreport.vocabulary import canonical_labels


class TestCleanRecords:
    """Invariants of the clean record table."""

    def test_columns(self, records):
        assert list(records.columns) == CLEAN_COLUMNS

    def test_unmatched_labels_are_dropped(self, raw_records, records):
        assert len(raw_records) == 9
        assert len(records) == 8
        assert "SUMMARY OF JUNE 3" not in records["event_type"].tolist()

    def test_event_types_are_canonical(self, records, vocabulary):
        allowed = {label.lower() for label in canonical_labels(vocabulary)}
        assert records["event_type"].str.lower().isin(allowed).all()

    def test_total_is_property_plus_crop(self, records):
        assert (records["total_damage"] == records["property_damage"] + records["crop_damage"]).all()
        assert (records["property_damage"] >= 0).all()
        assert (records["crop_damage"] >= 0).all()

    def test_resolved_amounts(self, records):
        by_row = records.set_index(["event_type", "state"])
        assert by_row.loc[("Tornado", "TX"), "property_damage"] == 2500.0
        assert by_row.loc[("Thunderstorm Wind", "OK"), "property_damage"] == 1_000_000.0
        assert by_row.loc[("Thunderstorm Wind", "OK"), "crop_damage"] == 5000.0
        assert by_row.loc[("Flash Flood", "TX"), "property_damage"] == 3000.0
        assert by_row.loc[("Excessive Heat", "CA"), "crop_damage"] == 1e9
        assert by_row.loc[("Tornado", "PR"), "property_damage"] == 1e9
        assert by_row.loc[("Tornado", "DC"), "property_damage"] == 200.0
        assert by_row.loc[("Flood", "TX"), "property_damage"] == 4.0
        assert by_row.loc[("Tornado", "KS"), "property_damage"] == 0.0

    def test_undated_records_are_kept(self, records):
        assert records["start_date"].isna().sum() == 1

    def test_raw_records_are_not_modified(self, raw_records, vocabulary):
        before = raw_records.copy()
        clean_records(raw_records, vocabulary)
        pd.testing.assert_frame_equal(raw_records, before)

    def test_missing_columns(self, vocabulary):
        with pytest.raises(ValueError, match="missing columns"):
            clean_records(pd.DataFrame({"event_type": ["TORNADO"]}), vocabulary)


class TestResolveDamage:

    def test_drops_magnitude_and_unit_columns(self, raw_records):
        result = resolve_damage(raw_records)
        assert "property_damage_unit" not in result.columns
        assert "crop_damage_magnitude" not in result.columns
        assert {"property_damage", "crop_damage", "total_damage"} <= set(result.columns)
