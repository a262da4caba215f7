"""
Tests for event type label normalization.
"""

import pandas as pd
import pytest

from stormreport.normalizer import (
    NormalizerMode,
    normalize_label,
    build_label_map,
    normalize_event_types,
)
from stormreport.vocabulary import build_vocabulary, canonical_labels


class TestNormalizeLabel:
    """Single label normalization against the bundled vocabulary."""

    @pytest.mark.parametrize("raw,expected", [
        ("TSTM WIND", "Thunderstorm Wind"),
        ("THUNDERSTORM WINDS", "Thunderstorm Wind"),
        ("MARINE TSTM WIND", "Marine Thunderstorm Wind"),
        ("FLASH FLOODING", "Flash Flood"),
        ("FLOOD", "Flood"),
        ("URBAN/SML STREAM FLD", "Flood"),
        ("HURRICANE/TYPHOON", "Hurricane (Typhoon)"),
        ("HEAT WAVE", "Excessive Heat"),
        ("EXTREME COLD", "Extreme Cold/Wind Chill"),
        ("RIP CURRENTS", "Rip Current"),
        ("WILD/FOREST FIRE", "Wildfire"),
        ("LANDSLIDE", "Debris Flow"),
        ("STORM SURGE", "Storm Surge/Tide"),
    ])
    def test_raw_labels(self, vocabulary, raw, expected):
        assert normalize_label(raw, vocabulary) == expected

    @pytest.mark.parametrize("raw", ["SUMMARY OF JUNE 3", "OTHER", "", None])
    def test_unmatched_labels(self, vocabulary, raw):
        assert normalize_label(raw, vocabulary) is None

    def test_canonical_labels_are_case_insensitive(self, vocabulary):
        assert normalize_label("tornado", vocabulary) == "Tornado"
        assert normalize_label("FLASH FLOOD", vocabulary) == "Flash Flood"

    def test_idempotent_on_canonical_labels(self, vocabulary):
        for label in canonical_labels(vocabulary):
            assert normalize_label(label, vocabulary) == label

    def test_idempotent_on_normalized_output(self, vocabulary):
        raw = ["TSTM WIND", "HEAT WAVE", "URBAN/SML STREAM FLD", "EXTREME COLD", "GLAZE"]
        once = [normalize_label(label, vocabulary) for label in raw]
        twice = [normalize_label(label, vocabulary) for label in once]
        assert once == twice


class TestModes:
    """first_match versus cascade."""

    @pytest.fixture
    def chained_vocabulary(self):
        # The second pattern matches the first entry's canonical label
        return build_vocabulary([
            ("Wind", "WIND", None),
            ("Windy Storm", "Wind", None),
        ])

    def test_first_match_wins(self, chained_vocabulary):
        assert normalize_label("HIGH WIND", chained_vocabulary) == "Wind"

    def test_cascade_rewrites_assigned_label(self, chained_vocabulary):
        assert normalize_label("HIGH WIND", chained_vocabulary, NormalizerMode.CASCADE) == "Windy Storm"

    def test_mode_accepts_string_value(self, chained_vocabulary):
        assert normalize_label("HIGH WIND", chained_vocabulary, "cascade") == "Windy Storm"

    def test_cascade_drops_labels_left_non_canonical(self):
        vocabulary = build_vocabulary([("Hail", "HAIL", None)])
        assert normalize_label("TORNADO", vocabulary, NormalizerMode.CASCADE) is None

    def test_unknown_mode(self, chained_vocabulary):
        with pytest.raises(ValueError):
            normalize_label("HIGH WIND", chained_vocabulary, "fuzzy")


class TestNormalizeEventTypes:
    """Whole-table normalization."""

    def test_label_map_covers_distinct_labels(self, vocabulary):
        label_map = build_label_map(["TSTM WIND", "TSTM WIND", "NONSENSE", None], vocabulary)
        assert label_map == {"TSTM WIND": "Thunderstorm Wind", "NONSENSE": None}

    def test_unmatched_rows_are_dropped(self, vocabulary):
        df = pd.DataFrame({
            "event_type": ["TSTM WIND", "NONSENSE", "TORNADO", None],
            "state": ["TX", "TX", "OK", "KS"],
        })

        result = normalize_event_types(df, vocabulary)

        assert result["event_type"].tolist() == ["Thunderstorm Wind", "Tornado"]
        assert result["state"].tolist() == ["TX", "OK"]

    def test_input_is_not_modified(self, vocabulary):
        df = pd.DataFrame({"event_type": ["TSTM WIND"]})
        normalize_event_types(df, vocabulary)
        assert df["event_type"].tolist() == ["TSTM WIND"]

    def test_every_label_is_canonical(self, raw_records, vocabulary):
        result = normalize_event_types(raw_records, vocabulary)
        allowed = {label.lower() for label in canonical_labels(vocabulary)}
        assert result["event_type"].str.lower().isin(allowed).all()
