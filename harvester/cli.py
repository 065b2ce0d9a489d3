# File: harvester/cli.py

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from harvester.core.common.errors import OutputInitializationError
from harvester.core.config.settings import settings
from harvester.core.database.connection import build_session_factory
from harvester.features.run_summary.data.repository import SqlRunRepository
from harvester.service.models import HarvestConfig
from harvester.service.runner import run_harvest

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="harvester",
        description="Merge every valid CustomerData*.csv row under a folder into one output file.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        help=f"Folder to scan (default: {settings.ROOT_DIR})",
    )
    parser.add_argument("--output", type=Path, help=f"Merged CSV file (default: {settings.OUTPUT_PATH})")
    parser.add_argument("--log", type=Path, help=f"Run log file (default: {settings.LOG_PATH})")
    parser.add_argument("--workers", type=int, help="Worker threads (default: HARVESTER_MAX_WORKERS or cpu count + 4)")
    parser.add_argument("--pattern", help=f"File name pattern (default: {settings.FILE_PATTERN})")
    parser.add_argument(
        "--history",
        type=int,
        metavar="N",
        help="Print the N most recent runs from the run-history database and exit",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def show_history(database_url: Optional[str], limit: int) -> int:
    if not database_url:
        logger.error("No run-history database configured.")
        return 1
    try:
        runs = SqlRunRepository(build_session_factory(database_url)).recent_runs(limit)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Cannot read run history: {e}")
        return 1

    for run in runs:
        timestamp = run.logged_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        print(
            f"{timestamp}  valid={run.valid_rows}  skipped={run.skipped_rows}  "
            f"elapsed={run.elapsed_seconds:.3f}s  root={run.root_path}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    try:
        config = HarvestConfig.from_settings(
            settings,
            root_path=args.root,
            output_path=args.output,
            log_path=args.log,
            max_workers=args.workers,
            file_pattern=args.pattern,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.history is not None:
        return show_history(config.database_url, args.history)

    try:
        report = run_harvest(config)
    except OutputInitializationError as e:
        logger.critical(f"Harvest aborted: {e}")
        return 1

    print("Process completed.")
    print(f"Total skipped rows: {report.counters.skipped}")
    print(f"Total valid rows: {report.counters.valid}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
