"""
Event type label normalization.

Maps raw NOAA event type labels ('TSTM WIND', 'HURRICANE/TYPHOON',
'URBAN/SML STREAM FLD', ...) onto the canonical vocabulary.

Two modes:
- first_match: a label that is already canonical keeps its canonical
  spelling, otherwise the first vocabulary entry whose pattern is found wins.
- cascade: every entry is applied in turn to the label as it currently
  stands, so a later entry may rewrite a label assigned by an earlier one.
  This is how the original notebook's full-table substitution passes behave.

Labels that do not end up in the canonical set map to None and are dropped.
"""

import logging
from enum import Enum
from typing import Dict, Optional

import pandas as pd

from .constants import EVENT_TYPE

logger = logging.getLogger(__name__)


class NormalizerMode(Enum):
    FIRST_MATCH = "first_match"
    CASCADE = "cascade"


def _canonical_lookup(vocabulary) -> Dict[str, str]:
    return {entry.canonical_label.lower(): entry.canonical_label for entry in vocabulary}


def _first_match(label, vocabulary, lookup):
    canonical = lookup.get(label.strip().lower())
    if canonical:
        return canonical
    for entry in vocabulary:
        if entry.matches(label):
            return entry.canonical_label
    return None


def _cascade(label, vocabulary, lookup):
    current = label
    for entry in vocabulary:
        if entry.matches(current):
            current = entry.canonical_label
    return lookup.get(current.strip().lower())


def normalize_label(label, vocabulary, mode=NormalizerMode.FIRST_MATCH) -> Optional[str]:
    """
    Map one raw label to its canonical event type.

    Args:
        label: raw event type label
        vocabulary: ordered sequence of VocabularyEntry
        mode: NormalizerMode (or its string value)

    Returns:
        Canonical label, or None if the label matches nothing
    """
    if label is None or (not isinstance(label, str) and pd.isna(label)):
        return None
    mode = NormalizerMode(mode)
    lookup = _canonical_lookup(vocabulary)
    if mode is NormalizerMode.CASCADE:
        return _cascade(str(label), vocabulary, lookup)
    return _first_match(str(label), vocabulary, lookup)


def build_label_map(labels, vocabulary, mode=NormalizerMode.FIRST_MATCH) -> Dict[str, Optional[str]]:
    """Normalize each distinct raw label once. Returns raw label -> canonical (or None)."""
    mode = NormalizerMode(mode)
    lookup = _canonical_lookup(vocabulary)
    resolve = _cascade if mode is NormalizerMode.CASCADE else _first_match

    label_map = {}
    for label in pd.unique(pd.Series(labels).dropna()):
        label_map[label] = resolve(str(label), vocabulary, lookup)
    return label_map


def normalize_event_types(df, vocabulary, mode=NormalizerMode.FIRST_MATCH,
                          event_type_col=EVENT_TYPE):
    """
    Replace raw event type labels with canonical ones and drop unmatched rows.

    Args:
        df: DataFrame with raw labels in event_type_col
        vocabulary: ordered sequence of VocabularyEntry
        mode: NormalizerMode
        event_type_col: Name of the event type column

    Returns:
        New DataFrame holding only rows with a canonical event type
    """
    label_map = build_label_map(df[event_type_col], vocabulary, mode)

    df = df.copy()
    df[event_type_col] = df[event_type_col].astype(object).map(label_map)

    unmatched = df[event_type_col].isna()
    if unmatched.any():
        unmatched_labels = sum(1 for v in label_map.values() if v is None)
        logger.info(
            f"Dropped {int(unmatched.sum()):,} records with {unmatched_labels:,} "
            f"unmatched event type labels"
        )

    matched = sum(1 for v in label_map.values() if v is not None)
    logger.info(f"Normalized {matched:,} of {len(label_map):,} distinct event type labels")

    return df[~unmatched].reset_index(drop=True)
