"""
Storm Damage Report

Downloads the NOAA Storm Database (if not cached), normalizes event types,
resolves damage estimates and writes ranking tables, yearly frequency
series and per-state choropleth tables.

Usage:
    stormreport [--data FILE] [--top N] [--event-type "Tornado" ...]

Output:
    Tables, plots, state parquet files and summary.json in the output folder
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .aggregate import top_n
from .constants import EVENT_TYPE
from .download import fetch_if_absent
from .loader import load_raw_records
from .logging_setup import configure_logging
from .metrics import Metric
from .normalizer import NormalizerMode
from .paths import data_root, output_dir
from .pipeline import clean_records
from .report import build_report, format_table
from .settings import load_settings
from .vocabulary import load_vocabulary

logger = logging.getLogger(__name__)


def parse_args(argv=None, settings=None):
    """Parse command line arguments, with defaults taken from settings."""
    settings = settings or load_settings()
    parser = argparse.ArgumentParser(description='NOAA storm damage report')

    parser.add_argument('--data', type=Path,
                        help='Local storm data CSV (skips the download)')
    parser.add_argument('--url', default=settings['dataset_url'],
                        help='Dataset URL (default: NOAA StormData.csv.bz2)')
    parser.add_argument('--vocabulary', default=settings['vocabulary_path'] or None,
                        help='Vocabulary CSV (default: bundled NWS event types)')
    parser.add_argument('--output', type=Path, default=settings['output_dir'] or None,
                        help='Output folder (default: ./output)')
    parser.add_argument('--top', type=int, default=settings['top_n'],
                        help=f"Event types per ranking (default: {settings['top_n']})")
    parser.add_argument('--event-type', dest='event_types', action='append',
                        help='Event type to chart over time and map by state (repeatable)')
    parser.add_argument('--mode', choices=[m.value for m in NormalizerMode],
                        default=settings['normalizer_mode'],
                        help='Label normalizer mode (default: first_match)')
    parser.add_argument('--force', action='store_true',
                        help='Download again even if a cached copy exists')
    parser.add_argument('--no-plots', dest='plots', action='store_false',
                        help='Skip matplotlib figures')

    args = parser.parse_args(argv)
    if not args.event_types:
        args.event_types = list(settings['event_types'])
    return args


def resolve_vocabulary_path(args, settings):
    """Local vocabulary path, downloading settings['vocabulary_url'] when configured."""
    if args.vocabulary:
        return Path(args.vocabulary)
    if settings.get('vocabulary_url'):
        return fetch_if_absent(settings['vocabulary_url'], data_root(),
                               force=args.force, timeout=settings['download_timeout'])
    return None


def main(argv=None):
    """Main report logic."""
    load_dotenv()
    settings = load_settings()
    args = parse_args(argv, settings)
    configure_logging()

    print("=" * 70)
    print("NOAA Storm Damage Report")
    print("=" * 70)

    try:
        if args.data:
            data_path = args.data
        else:
            data_path = fetch_if_absent(args.url, data_root(), filename=settings['dataset_file'],
                                        force=args.force, timeout=settings['download_timeout'])
        vocabulary = load_vocabulary(resolve_vocabulary_path(args, settings))
        raw = load_raw_records(data_path)
    except OSError as e:
        logger.error(str(e))
        print(f"\nError: {e}")
        return 1

    records = clean_records(raw, vocabulary, mode=args.mode)

    print(f"\nRaw records:   {len(raw):,}")
    print(f"Clean records: {len(records):,}")
    print(f"Event types:   {records[EVENT_TYPE].nunique():,} of {len(vocabulary)}")

    for metric in (Metric.FATALITIES, Metric.INJURIES, Metric.TOTAL_DAMAGE):
        print("\n" + "=" * 70)
        print(f"Top {args.top} event types by {metric.label}")
        print("=" * 70)
        print(format_table(top_n(records, metric, args.top), metric))

    out = args.output or output_dir()
    artifacts = build_report(records, out, top=args.top,
                             event_types=args.event_types, plots=args.plots)

    print("\n" + "=" * 70)
    print("REPORT COMPLETE")
    print("=" * 70)
    print(f"\n{len(artifacts)} files written to: {out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
