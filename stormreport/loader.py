"""
Load raw storm event records.

Reads a NOAA storm CSV (plain, .bz2 or .gz), keeps only the columns the
report needs and renames them to the raw record fields in constants.RAW_COLUMNS.

Two source layouts are recognised from the header:
- storm_data: the StormData.csv.bz2 extract (EVTYPE, PROPDMG + PROPDMGEXP, ...)
- storm_events: NCEI StormEvents_details files (EVENT_TYPE, combined
  DAMAGE_PROPERTY strings like '10.00K', full upper-case state names)
"""

import logging
from pathlib import Path

import pandas as pd

from .constants import (
    SOURCE_LAYOUTS,
    SOURCE_DATE_FORMATS,
    SOURCE_YEAR_COLUMNS,
    STATE_NAME_TO_ABBREV,
    RAW_COLUMNS,
    EVENT_TYPE,
    STATE,
    START_DATE,
    INJURIES,
    FATALITIES,
    PROPERTY_MAGNITUDE,
    PROPERTY_UNIT,
    CROP_MAGNITUDE,
    CROP_UNIT,
)
from .units import split_combined_damage

logger = logging.getLogger(__name__)


def detect_layout(columns) -> str:
    """
    Pick the source layout whose columns are all present.

    Raises:
        ValueError: if the header matches no known layout
    """
    present = {str(c).strip().upper() for c in columns}
    for name, mapping in SOURCE_LAYOUTS.items():
        if set(mapping).issubset(present):
            return name
    raise ValueError(
        "Unrecognised storm data layout. Expected the columns of one of: "
        + "; ".join(f"{name} ({', '.join(mapping)})" for name, mapping in SOURCE_LAYOUTS.items())
    )


def state_name_to_abbrev(state_name):
    """Convert state name to abbreviation. Two-letter codes pass through."""
    if state_name is None or pd.isna(state_name):
        return None
    state_upper = str(state_name).upper().strip()
    if len(state_upper) == 2:
        return state_upper
    return STATE_NAME_TO_ABBREV.get(state_upper)


def _split_damage_column(df, magnitude_col, unit_col):
    parts = df[magnitude_col].apply(split_combined_damage)
    df[magnitude_col] = parts.map(lambda p: p[0])
    df[unit_col] = parts.map(lambda p: p[1])


def _shift_years(dates, shift):
    dates = dates.copy()
    for offset in shift.dropna().unique():
        if offset:
            mask = shift == offset
            dates[mask] = dates[mask] + pd.DateOffset(years=int(offset))
    return dates


def parse_start_dates(df, layout) -> pd.Series:
    """
    Parse the start date column of a raw frame with its layout's fixed format.

    Two-digit years ('28-APR-50') take their century from the layout's year
    column when the file has one. Without it, years later than the current
    year are moved back a century.

    Args:
        df: raw DataFrame with upper-case headers
        layout: source layout name

    Returns:
        datetime64 Series, NaT where the value is missing or unparseable
    """
    source_col = next(raw for raw, field in SOURCE_LAYOUTS[layout].items() if field == START_DATE)
    dates = pd.to_datetime(df[source_col], errors="coerce", format=SOURCE_DATE_FORMATS[layout])

    year_col = SOURCE_YEAR_COLUMNS.get(layout)
    if year_col is None:
        return dates

    if year_col in df.columns:
        years = pd.to_numeric(df[year_col], errors="coerce")
        shift = ((years - dates.dt.year) / 100).round() * 100
    else:
        future = dates.dt.year > pd.Timestamp.now().year
        shift = future.astype(int) * -100
    return _shift_years(dates, shift)


def prepare_raw_records(df, layout=None) -> pd.DataFrame:
    """
    Restrict a raw storm DataFrame to the record fields and coerce types.

    Args:
        df: DataFrame as read from a NOAA CSV
        layout: 'storm_data' or 'storm_events' (detected when omitted)

    Returns:
        DataFrame with columns RAW_COLUMNS. Unparseable dates become NaT,
        missing counts and magnitudes become 0.
    """
    df = df.rename(columns=lambda c: str(c).strip().upper())
    layout = layout or detect_layout(df.columns)
    mapping = SOURCE_LAYOUTS[layout]

    records = df[list(mapping)].rename(columns=mapping).copy()

    if layout == "storm_events":
        _split_damage_column(records, PROPERTY_MAGNITUDE, PROPERTY_UNIT)
        _split_damage_column(records, CROP_MAGNITUDE, CROP_UNIT)

    records[EVENT_TYPE] = records[EVENT_TYPE].str.strip()
    records[STATE] = records[STATE].apply(state_name_to_abbrev)
    records[START_DATE] = parse_start_dates(df, layout)

    for col in [INJURIES, FATALITIES, PROPERTY_MAGNITUDE, CROP_MAGNITUDE]:
        records[col] = pd.to_numeric(records[col], errors="coerce").fillna(0)

    for col in [PROPERTY_UNIT, CROP_UNIT]:
        records[col] = records[col].fillna("").astype(str).str.strip()

    bad_dates = int(records[START_DATE].isna().sum())
    if bad_dates:
        logger.warning(f"{bad_dates:,} records have a missing or unparseable start date")

    return records[RAW_COLUMNS]


def load_raw_records(path, layout=None) -> pd.DataFrame:
    """
    Read a storm CSV into raw records.

    Raises:
        OSError: if the file is missing or cannot be read
        ValueError: if the header matches no known layout
    """
    path = Path(path)
    if not path.exists():
        raise OSError(f"Storm data file not found: {path}")

    logger.info(f"Loading storm data: {path}")
    try:
        df = pd.read_csv(path, low_memory=False, compression="infer", dtype=str)
    except (OSError, EOFError) as e:
        raise OSError(f"Could not read storm data file {path}: {e}") from e

    records = prepare_raw_records(df, layout)
    logger.info(f"Loaded {len(records):,} raw records")
    return records
