"""
Aggregations over clean storm records.

All functions take the clean records DataFrame explicitly and return pandas
objects: a ranked DataFrame for top_n, and Series keyed by year or state
for the temporal and geographic views.
"""

import pandas as pd

from .constants import (
    EVENT_TYPE,
    STATE,
    START_DATE,
    US_STATES,
)
from .metrics import Metric


def _event_type_mask(records, event_type) -> pd.Series:
    target = str(event_type).strip().lower()
    return records[EVENT_TYPE].str.lower() == target


def top_n(records, metric, n) -> pd.DataFrame:
    """
    Rank event types by the summed metric.

    Args:
        records: clean records
        metric: Metric or metric name
        n: number of event types to keep

    Returns:
        DataFrame with columns [event_type, <metric>], sorted descending by
        value with ties broken by event type ascending. Holds
        min(n, distinct event types) rows.
    """
    metric = Metric.parse(metric)
    totals = (
        records.groupby(EVENT_TYPE, sort=False)[metric.column]
        .sum()
        .reset_index()
        .sort_values([metric.column, EVENT_TYPE], ascending=[False, True], kind="mergesort")
    )
    n = max(int(n), 0)
    return totals.head(n).reset_index(drop=True)


def event_years(records) -> list:
    """Sorted calendar years present in the records (undated records ignored)."""
    years = records[START_DATE].dropna().dt.year.astype(int).unique()
    return sorted(int(y) for y in years)


def event_frequency_by_year(records, event_type) -> pd.Series:
    """
    Count records of one event type per calendar year.

    Every year present anywhere in the records is in the index, with 0 for
    years without a matching event. Records without a start date are not
    counted.
    """
    dated = records[records[START_DATE].notna()]
    matching = dated[_event_type_mask(dated, event_type)]

    counts = matching[START_DATE].dt.year.astype(int).value_counts()
    years = pd.Index(event_years(records), name="year")
    return counts.reindex(years, fill_value=0).astype(int).rename("count")


def _by_state(values: pd.Series, name) -> pd.Series:
    index = pd.Index(US_STATES, name=STATE)
    return values.reindex(index, fill_value=0).rename(name)


def damage_by_state(records, metric) -> pd.Series:
    """
    Sum an outcome metric per state.

    Only the 50 standard states are reported; records from DC, territories
    and marine zones are left out. States without records get 0.
    """
    metric = Metric.parse(metric)
    in_states = records[records[STATE].isin(US_STATES)]
    totals = in_states.groupby(STATE)[metric.column].sum()
    return _by_state(totals, metric.column)


def event_count_by_state(records, event_type) -> pd.Series:
    """Count records of one event type per state, over the 50 standard states."""
    in_states = records[records[STATE].isin(US_STATES)]
    counts = in_states[_event_type_mask(in_states, event_type)].groupby(STATE).size()
    return _by_state(counts, "count").astype(int)
