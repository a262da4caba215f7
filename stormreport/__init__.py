"""
stormreport package - NOAA storm damage analysis.

This package provides:
- Vocabulary of canonical event types (vocabulary.py)
- Event type label normalization (normalizer.py)
- Damage unit resolution (units.py)
- Raw record loading and the clean record pipeline (loader.py, pipeline.py)
- Rankings, yearly counts and per-state aggregates (aggregate.py)
- Tables, plots and choropleth-ready state maps (report.py)
- Dataset download (download.py)
- Settings, paths and logging (settings.py, paths.py, logging_setup.py)
"""

# Re-export key functions for convenience
from .constants import (
    US_STATES,
    UNIT_EXPONENTS,
    CLEAN_COLUMNS,
    RAW_COLUMNS,
)

from .metrics import Metric

from .units import (
    resolve_exponent,
    resolve_amount,
    resolve_amounts,
)

from .vocabulary import (
    VocabularyEntry,
    build_vocabulary,
    load_vocabulary,
    canonical_labels,
)

from .normalizer import (
    NormalizerMode,
    normalize_label,
    normalize_event_types,
)

from .loader import (
    load_raw_records,
    parse_start_dates,
    prepare_raw_records,
)

from .pipeline import clean_records

from .aggregate import (
    top_n,
    event_frequency_by_year,
    damage_by_state,
    event_count_by_state,
)

__version__ = "0.1.0"
