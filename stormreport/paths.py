"""
Centralized path configuration for the stormreport project.

Environment Variables (in priority order):
    STORM_DATA_ROOT    - Direct path to the data folder (raw downloads, vocabulary)
                         e.g. STORM_DATA_ROOT=/mnt/storm-data
    STORM_REPORT_ROOT  - Path to the project folder (settings.json, logs/, output/)

Folder Structure (local development):
    storm-report/
        settings.json   - Optional settings overrides
        data/           - Downloaded StormData.csv.bz2 (never committed)
        logs/           - stormreport.log
        output/         - Tables, plots and state map parquet files
"""

import os
from pathlib import Path

# =============================================================================
# Base Path Detection
# =============================================================================

def _get_project_root() -> Path:
    """
    Determine the project root directory.

    Priority:
    1. STORM_REPORT_ROOT environment variable
    2. Current working directory
    """
    env_root = os.environ.get("STORM_REPORT_ROOT")
    if env_root:
        return Path(env_root)
    return Path.cwd()


def _get_data_root() -> Path:
    """
    Get the folder that holds downloaded source files.

    Priority:
    1. STORM_DATA_ROOT environment variable
    2. data/ inside the project root
    """
    env_root = os.environ.get("STORM_DATA_ROOT")
    if env_root:
        return Path(env_root)
    return _get_project_root() / "data"


def data_root() -> Path:
    return _get_data_root()


def logs_dir() -> Path:
    return _get_project_root() / "logs"


def output_dir() -> Path:
    return _get_project_root() / "output"


def settings_path() -> Path:
    return _get_project_root() / "settings.json"
