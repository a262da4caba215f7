"""
Shared fixtures for stormreport tests.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd
import pytest

from stormreport.constants import RAW_COLUMNS
from stormreport.pipeline import clean_records
from stormreport.vocabulary import load_vocabulary


@pytest.fixture(scope="session")
def vocabulary():
    """The bundled NWS event type vocabulary."""
    return load_vocabulary()


@pytest.fixture
def raw_records():
    """
    Small raw record table covering the awkward cases:
    an unmatched label, a territory, an undated record, a lower-case
    label, a negative magnitude and '?' / digit / letter unit codes.
    """
    rows = [
        ("TORNADO", "TX", "1995-05-01", 10, 2, 2.5, "K", 0, ""),
        ("TSTM WIND", "OK", "1995-06-01", 1, 0, 1, "M", 5, "K"),
        ("FLASH FLOODING", "TX", "1996-03-01", 0, 1, 3, "3", 0, ""),
        ("HEAT WAVE", "CA", "1997-07-01", 5, 3, 0, "", 1, "B"),
        ("SUMMARY OF JUNE 3", "TX", "1997-06-03", 0, 0, 1, "K", 0, ""),
        ("TORNADO", "PR", "1997-04-01", 1, 0, 1, "b", 0, ""),
        ("Tornado", "DC", None, 0, 0, 2, "h", 0, ""),
        ("FLOOD", "TX", "1998-01-01", 0, 0, 4, "?", 0, ""),
        ("tornado", "KS", "1998-05-01", 0, 0, -5, "K", 0, ""),
    ]
    df = pd.DataFrame(rows, columns=RAW_COLUMNS)
    df["start_date"] = pd.to_datetime(df["start_date"])
    return df


@pytest.fixture
def records(raw_records, vocabulary):
    """Clean records derived from raw_records."""
    return clean_records(raw_records, vocabulary)
