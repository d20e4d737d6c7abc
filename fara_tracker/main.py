import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import psycopg

from fara_tracker.config.settings import Settings
from fara_tracker.database.connection import close_pool, init_pool
from fara_tracker.database.repositories.registration_repository import (
    RegistrationRepository,
)
from fara_tracker.logging.logger import Log
from fara_tracker.manifest.exceptions import ManifestError
from fara_tracker.manifest.selector import DocumentSelector
from fara_tracker.processor.processor import build_processor
from fara_tracker.summary.country_summary import CountrySummaryView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fara-tracker",
        description="Ingest FARA filings listed in the document manifest.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Maximum number of documents to process (0 = unlimited, default: 5)",
    )
    parser.add_argument(
        "--agent",
        default=None,
        help="Only process registrants whose name contains this text",
    )
    parser.add_argument(
        "--years",
        type=int,
        default=10,
        help="Only process documents stamped within this many years (default: 10)",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Only process documents stamped in this calendar year",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Path to the manifest CSV (default: MANIFEST_PATH setting)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the per-country summary after the run",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: select documents -> initialize pool -> process -> store."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    manifest_path = args.manifest or settings.manifest_path
    try:
        documents = DocumentSelector().select(
            manifest_path,
            max_results=max(args.limit, 0),
            agent_filter=args.agent,
            years_back=args.years,
            target_year=args.year,
        )
    except ManifestError as exc:
        Log.error(str(exc))
        return 1
    Log.info(f"Selected {len(documents)} documents from {manifest_path}")

    try:
        init_pool(settings)
    except psycopg.Error as exc:
        Log.error(f"Database unavailable: {exc}")
        return 1

    try:
        processor = build_processor(settings)
        try:
            run_summary = processor.run(documents)
        finally:
            processor.close()
        print(f"Successfully stored {run_summary.stored} registrations")
        if args.summary:
            print(CountrySummaryView(RegistrationRepository()).format_table())
    finally:
        close_pool()
    return 0


if __name__ == "__main__":
    sys.exit(main())
