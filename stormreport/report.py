"""
Report output: tables, plots and choropleth-ready state maps.

State maps are written as parquet keyed by loc_id ('USA-TX') so a map
frontend can join them onto state geometry. Plots use matplotlib, imported
lazily so the pipeline and aggregations run without it.
"""

import json
import logging
import re
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .aggregate import (
    top_n,
    damage_by_state,
    event_count_by_state,
    event_frequency_by_year,
    event_years,
)
from .constants import EVENT_TYPE, SOURCE_INFO, STATE, state_abbreviations
from .metrics import Metric, DAMAGE_METRICS

logger = logging.getLogger(__name__)


def slugify(text) -> str:
    """'Storm Surge/Tide' -> 'storm_surge_tide'"""
    return re.sub(r"[^a-z0-9]+", "_", str(text).lower()).strip("_")


# =============================================================================
# Tables
# =============================================================================

def format_table(table, metric) -> str:
    """Render a top_n table as aligned text, damage in millions of USD."""
    metric = Metric.parse(metric)
    display = table.copy()
    if metric in DAMAGE_METRICS:
        display[metric.column] = display[metric.column] / 1e6
        header = f"{metric.label} (USD millions)"
        formatter = "{:,.1f}".format
    else:
        header = metric.label
        formatter = "{:,.0f}".format

    display = display.rename(columns={EVENT_TYPE: "Event Type", metric.column: header})
    display.index = range(1, len(display) + 1)
    return display.to_string(formatters={header: formatter})


# =============================================================================
# Parquet output
# =============================================================================

def state_map_schema(value_type=pa.float64()):
    """Schema for a per-state choropleth table."""
    return pa.schema([
        ('loc_id', pa.string()),
        ('state', pa.string()),
        ('state_name', pa.string()),
        ('value', value_type),
    ])


def state_map_frame(values: pd.Series) -> pd.DataFrame:
    """Turn a state -> value Series into loc_id / state / state_name / value rows."""
    frame = values.rename("value").reset_index().rename(columns={values.index.name or "index": STATE})
    frame.insert(0, 'loc_id', 'USA-' + frame[STATE])
    frame.insert(2, 'state_name', frame[STATE].map(state_abbreviations))
    return frame


def save_parquet(df, output_path, schema=None, compression='snappy'):
    """Save DataFrame to parquet with standard settings. Returns file size in MB."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if schema:
        table = pa.Table.from_pandas(df, schema=schema, preserve_index=False)
    else:
        table = pa.Table.from_pandas(df, preserve_index=False)

    pq.write_table(table, output_path, compression=compression)

    size_mb = output_path.stat().st_size / 1024 / 1024
    logger.info(f"Saved {output_path.name}: {len(df):,} rows, {size_mb:.2f} MB")
    return size_mb


def write_state_map(values: pd.Series, output_path) -> Path:
    """Write a state -> value Series as a choropleth-ready parquet file."""
    frame = state_map_frame(values)
    if pd.api.types.is_integer_dtype(frame['value']):
        schema = state_map_schema(pa.int64())
    else:
        frame['value'] = frame['value'].astype(float)
        schema = state_map_schema(pa.float64())
    save_parquet(frame, output_path, schema=schema)
    return Path(output_path)


# =============================================================================
# Plots
# =============================================================================

def _pyplot():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install with: python -m pip install matplotlib"
        ) from e
    return plt


def _save(plt, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()
    return path


def plot_top_n(table, metric, output_path) -> Path:
    """Horizontal bar chart of a top_n table, largest bar on top."""
    metric = Metric.parse(metric)
    plt = _pyplot()

    values = table[metric.column]
    xlabel = metric.label
    if metric in DAMAGE_METRICS:
        values = values / 1e9
        xlabel = f"{metric.label} (USD billions)"

    plt.figure(figsize=(8, max(3, 0.4 * len(table) + 1)))
    plt.barh(table[EVENT_TYPE][::-1], values[::-1])
    plt.title(f"Top {len(table)} Event Types by {metric.label}")
    plt.xlabel(xlabel)
    return _save(plt, output_path)


def plot_frequency(counts: pd.Series, event_type, output_path) -> Path:
    """Line plot of yearly event counts."""
    plt = _pyplot()
    plt.figure(figsize=(9, 4))
    plt.plot(counts.index, counts.values, marker="o", markersize=3)
    plt.title(f"{event_type} Events per Year")
    plt.xlabel("Year")
    plt.ylabel("Events")
    return _save(plt, output_path)


def plot_damage_vs_casualties(records, output_path) -> Path:
    """Scatter of total damage against fatalities + injuries, one point per event type."""
    plt = _pyplot()
    totals = records.groupby(EVENT_TYPE)[
        [Metric.TOTAL_DAMAGE.column, Metric.FATALITIES.column, Metric.INJURIES.column]
    ].sum()
    casualties = totals[Metric.FATALITIES.column] + totals[Metric.INJURIES.column]

    plt.figure(figsize=(8, 6))
    plt.scatter(casualties, totals[Metric.TOTAL_DAMAGE.column] / 1e9)
    for label, x, y in zip(totals.index, casualties, totals[Metric.TOTAL_DAMAGE.column] / 1e9):
        plt.annotate(label, (x, y), fontsize=6)
    plt.title("Economic vs Health Impact by Event Type")
    plt.xlabel("Fatalities + Injuries")
    plt.ylabel("Total Damage (USD billions)")
    return _save(plt, output_path)


# =============================================================================
# Full report
# =============================================================================

def write_summary(records, output_dir, artifacts) -> Path:
    """Write summary.json describing the clean records and the files produced."""
    years = event_years(records)
    summary = {
        "source_id": SOURCE_INFO["source_id"],
        "source_name": SOURCE_INFO["source_name"],
        "source": {
            "url": SOURCE_INFO["source_url"],
            "license": SOURCE_INFO["license"],
        },
        "records": int(len(records)),
        "event_types": int(records[EVENT_TYPE].nunique()),
        "temporal_coverage": {
            "start": years[0] if years else None,
            "end": years[-1] if years else None,
        },
        "totals": {
            metric.column: float(records[metric.column].sum()) for metric in Metric
        },
        "artifacts": {name: str(Path(path).name) for name, path in artifacts.items()},
        "generated": pd.Timestamp.now().strftime("%Y-%m-%d"),
    }

    path = Path(output_dir) / "summary.json"
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(summary, f, indent=2)
    return path


def build_report(records, output_dir, top=10, event_types=(), plots=True) -> dict:
    """
    Produce every report artifact from clean records.

    Args:
        records: clean records
        output_dir: folder for tables, plots and parquet files
        top: size of the top-N rankings
        event_types: canonical event types to chart over time and map by state
        plots: also render matplotlib figures

    Returns:
        dict of artifact name -> Path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    artifacts = {}

    tables = []
    for metric in Metric:
        table = top_n(records, metric, top)
        tables.append(f"Top {len(table)} event types by {metric.label}\n{format_table(table, metric)}\n")
        artifacts[f"top_{metric.column}_csv"] = output_dir / f"top_{metric.column}.csv"
        table.to_csv(artifacts[f"top_{metric.column}_csv"], index=False)
        if plots:
            artifacts[f"top_{metric.column}_plot"] = plot_top_n(
                table, metric, output_dir / f"top_{metric.column}.png")

        artifacts[f"state_{metric.column}"] = write_state_map(
            damage_by_state(records, metric), output_dir / f"state_{metric.column}.parquet")

    artifacts["tables"] = output_dir / "top_event_types.txt"
    artifacts["tables"].write_text("\n".join(tables), encoding="utf-8")

    for event_type in event_types:
        slug = slugify(event_type)
        counts = event_frequency_by_year(records, event_type)
        artifacts[f"frequency_{slug}_csv"] = output_dir / f"frequency_{slug}.csv"
        counts.to_csv(artifacts[f"frequency_{slug}_csv"])
        if plots:
            artifacts[f"frequency_{slug}_plot"] = plot_frequency(
                counts, event_type, output_dir / f"frequency_{slug}.png")

        artifacts[f"state_count_{slug}"] = write_state_map(
            event_count_by_state(records, event_type), output_dir / f"state_count_{slug}.parquet")

    if plots:
        artifacts["impact_plot"] = plot_damage_vs_casualties(records, output_dir / "impact.png")

    artifacts["summary"] = write_summary(records, output_dir, artifacts)
    logger.info(f"Report written to {output_dir} ({len(artifacts)} files)")
    return artifacts
