"""
Reference vocabulary of canonical event types.

Each entry pairs a canonical label with up to two regular expressions that
are searched (case-sensitive) against raw NOAA labels. Entry order sets
precedence, so more specific types ('Flash Flood') must come before the
generic ones they contain ('Flood').
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_VOCABULARY_PATH = Path(__file__).resolve().parent / "data" / "event_types.csv"

VOCABULARY_COLUMNS = ["canonical_label", "match_pattern_1", "match_pattern_2"]


@dataclass(frozen=True)
class VocabularyEntry:
    canonical_label: str
    match_pattern_1: Optional[re.Pattern]
    match_pattern_2: Optional[re.Pattern] = None

    def matches(self, label: str) -> bool:
        """True if either pattern is found in the label. A missing pattern never matches."""
        if self.match_pattern_1 is not None and self.match_pattern_1.search(label):
            return True
        if self.match_pattern_2 is not None and self.match_pattern_2.search(label):
            return True
        return False


def _compile(pattern, label, column) -> Optional[re.Pattern]:
    if pattern is None or pd.isna(pattern):
        return None
    text = str(pattern)
    if not text.strip():
        return None
    try:
        return re.compile(text)
    except re.error as e:
        raise ValueError(f"Invalid {column} for '{label}': {text!r} ({e})") from e


def build_vocabulary(rows: Iterable[Tuple]) -> Tuple[VocabularyEntry, ...]:
    """
    Build an ordered vocabulary from (label, pattern_1[, pattern_2]) rows.

    Raises:
        ValueError: on a blank label, a duplicate label, or an invalid regex
    """
    entries = []
    seen = set()
    for row in rows:
        label, pattern_1 = row[0], row[1]
        pattern_2 = row[2] if len(row) > 2 else None

        if label is None or pd.isna(label) or not str(label).strip():
            raise ValueError("Vocabulary entry with blank canonical_label")
        label = str(label).strip()
        if label.lower() in seen:
            raise ValueError(f"Duplicate canonical_label in vocabulary: '{label}'")
        seen.add(label.lower())

        entries.append(VocabularyEntry(
            canonical_label=label,
            match_pattern_1=_compile(pattern_1, label, "match_pattern_1"),
            match_pattern_2=_compile(pattern_2, label, "match_pattern_2"),
        ))
    return tuple(entries)


def load_vocabulary(path=None) -> Tuple[VocabularyEntry, ...]:
    """
    Load the vocabulary CSV (canonical_label, match_pattern_1, match_pattern_2).

    Args:
        path: CSV file path (default: the bundled NWS event type table)

    Returns:
        Ordered tuple of VocabularyEntry

    Raises:
        OSError: if the file cannot be read
        ValueError: if columns are missing or a pattern does not compile
    """
    path = Path(path) if path else DEFAULT_VOCABULARY_PATH
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
    except FileNotFoundError as e:
        raise OSError(f"Vocabulary file not found: {path}") from e

    df.columns = [c.strip().lower() for c in df.columns]
    missing = [c for c in VOCABULARY_COLUMNS[:2] if c not in df.columns]
    if missing:
        raise ValueError(f"Vocabulary file {path} is missing columns: {missing}")
    if "match_pattern_2" not in df.columns:
        df["match_pattern_2"] = None

    vocabulary = build_vocabulary(df[VOCABULARY_COLUMNS].itertuples(index=False, name=None))
    logger.info(f"Loaded {len(vocabulary)} vocabulary entries from {path}")
    return vocabulary


def canonical_labels(vocabulary) -> List[str]:
    """Canonical labels in vocabulary order."""
    return [entry.canonical_label for entry in vocabulary]
