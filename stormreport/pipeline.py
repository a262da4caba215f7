"""
Raw -> clean record pipeline.

restrict columns -> normalize labels -> filter -> resolve units -> derive totals
"""

import logging

import pandas as pd

from .constants import (
    RAW_COLUMNS,
    CLEAN_COLUMNS,
    EVENT_TYPE,
    PROPERTY_MAGNITUDE,
    PROPERTY_UNIT,
    CROP_MAGNITUDE,
    CROP_UNIT,
    PROPERTY_DAMAGE,
    CROP_DAMAGE,
    TOTAL_DAMAGE,
)
from .normalizer import NormalizerMode, normalize_event_types
from .units import resolve_amounts

logger = logging.getLogger(__name__)


def resolve_damage(df) -> pd.DataFrame:
    """Replace magnitude/unit pairs with absolute property, crop and total damage."""
    df = df.copy()
    df[PROPERTY_DAMAGE] = resolve_amounts(df[PROPERTY_MAGNITUDE], df[PROPERTY_UNIT])
    df[CROP_DAMAGE] = resolve_amounts(df[CROP_MAGNITUDE], df[CROP_UNIT])
    df[TOTAL_DAMAGE] = df[PROPERTY_DAMAGE] + df[CROP_DAMAGE]
    return df.drop(columns=[PROPERTY_MAGNITUDE, PROPERTY_UNIT, CROP_MAGNITUDE, CROP_UNIT])


def clean_records(raw, vocabulary, mode=NormalizerMode.FIRST_MATCH) -> pd.DataFrame:
    """
    Derive clean records from raw records.

    Args:
        raw: DataFrame with constants.RAW_COLUMNS
        vocabulary: ordered sequence of VocabularyEntry
        mode: label normalizer mode

    Returns:
        DataFrame with constants.CLEAN_COLUMNS. Every event_type is a
        canonical vocabulary label and total_damage equals
        property_damage + crop_damage.
    """
    missing = [c for c in RAW_COLUMNS if c not in raw.columns]
    if missing:
        raise ValueError(f"Raw records are missing columns: {missing}")

    records = raw[RAW_COLUMNS]
    records = normalize_event_types(records, vocabulary, mode)
    records = resolve_damage(records)

    logger.info(
        f"Clean records: {len(records):,} of {len(raw):,} "
        f"({records[EVENT_TYPE].nunique():,} event types)"
    )
    return records[CLEAN_COLUMNS]
