"""
Tests for rankings, yearly counts and per-state aggregates.
"""

import pytest

from stormreport.aggregate import (
    top_n,
    event_years,
    event_frequency_by_year,
    damage_by_state,
    event_count_by_state,
)
from stormreport.constants import US_STATES
from stormreport.metrics import Metric


class TestTopN:
    """Ranking event types by a summed metric."""

    def test_total_damage_ranking(self, records):
        table = top_n(records, Metric.TOTAL_DAMAGE, 3)

        assert table["event_type"].tolist() == ["Tornado", "Excessive Heat", "Thunderstorm Wind"]
        assert table["total_damage"].tolist() == [1_000_002_700.0, 1e9, 1_005_000.0]

    def test_ties_broken_by_event_type(self, records):
        table = top_n(records, "fatalities", 10)

        assert table["event_type"].tolist() == [
            "Excessive Heat", "Tornado", "Flash Flood", "Flood", "Thunderstorm Wind",
        ]
        assert table["fatalities"].tolist() == [3, 2, 1, 0, 0]

    def test_n_larger_than_groups_returns_all(self, records):
        assert len(top_n(records, Metric.INJURIES, 100)) == records["event_type"].nunique()

    @pytest.mark.parametrize("metric", list(Metric))
    def test_non_increasing(self, records, metric):
        values = top_n(records, metric, 10)[metric.column].tolist()
        assert values == sorted(values, reverse=True)

    def test_zero_n(self, records):
        assert top_n(records, Metric.INJURIES, 0).empty

    def test_unknown_metric(self, records):
        with pytest.raises(ValueError, match="Unknown metric"):
            top_n(records, "damage", 5)


class TestEventFrequencyByYear:
    """Yearly counts over the whole dataset's year axis."""

    def test_years(self, records):
        assert event_years(records) == [1995, 1996, 1997, 1998]

    def test_zero_count_years_are_present(self, records):
        counts = event_frequency_by_year(records, "Tornado")

        assert counts.index.tolist() == [1995, 1996, 1997, 1998]
        assert counts.tolist() == [1, 0, 1, 1]

    def test_event_type_is_case_insensitive(self, records):
        assert event_frequency_by_year(records, "flood").to_dict() == {
            1995: 0, 1996: 0, 1997: 0, 1998: 1,
        }

    def test_unknown_event_type_counts_zero(self, records):
        counts = event_frequency_by_year(records, "Tsunami")
        assert len(counts) == 4
        assert counts.sum() == 0


class TestStateAggregates:
    """Per-state values over the 50 standard states."""

    def test_damage_by_state_covers_50_states(self, records):
        totals = damage_by_state(records, Metric.TOTAL_DAMAGE)

        assert len(totals) == 50
        assert set(totals.index) == set(US_STATES)
        assert "PR" not in totals.index
        assert "DC" not in totals.index

    def test_damage_by_state_values(self, records):
        totals = damage_by_state(records, "total_damage")

        assert totals["TX"] == 5504.0
        assert totals["OK"] == 1_005_000.0
        assert totals["CA"] == 1e9
        assert totals["KS"] == 0.0
        assert totals.sum() == 5504.0 + 1_005_000.0 + 1e9

    def test_event_count_by_state(self, records):
        counts = event_count_by_state(records, "Tornado")

        assert len(counts) == 50
        assert counts["TX"] == 1
        assert counts["KS"] == 1
        assert counts.sum() == 2
