#!/usr/bin/env python3
"""
Calimeasure CLI - calibrated measurements from annotation projects.

Usage:
    calimeasure collect PROJECT.toml   - Print calibrated measurements
        [--csv OUT.csv] [--decimal-separator SEP] [--log-file LOG] [-v]
    calimeasure --help                 - Show this help
"""

import argparse
import logging
import sys
from pathlib import Path

from calimeasure.logging_config import setup_logging
from calimeasure.types import NumberFormat, PositionRecord

logger = logging.getLogger(__name__)


def _format_record(record) -> str:
    if isinstance(record, PositionRecord):
        return f"{record.name}: {record.x_display}; {record.y_display}"
    return f"{record.name}: {record.value_display}"


def collect_main(argv: list[str]) -> int:
    from calimeasure.config import collect_project, load_project
    from calimeasure.export import write_csv

    parser = argparse.ArgumentParser(
        prog="calimeasure collect",
        description="Collect calibrated measurements from a project file.",
    )
    parser.add_argument("project", type=Path, help="Project .toml file")
    parser.add_argument("--csv", type=Path, help="Also write records to this CSV file")
    parser.add_argument(
        "--decimal-separator",
        help="Override the decimal separator used for display values",
    )
    parser.add_argument("--log-file", type=Path, help="Also write log records to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    if not args.project.exists():
        logger.error("Project file not found: %s", args.project)
        return 1

    try:
        project = load_project(args.project)

        number_format = None
        if args.decimal_separator is not None:
            base = project.number_format or NumberFormat.current()
            number_format = base.with_decimal_separator(args.decimal_separator)

        records = collect_project(project, number_format)
    except ValueError as e:  # CalimeasureError included
        logger.error("%s", e)
        return 1

    for record in records:
        print(_format_record(record))

    if args.csv is not None:
        count = write_csv(records, args.csv)
        logger.info("Wrote %d records to %s", count, args.csv)

    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        print(__doc__)
        print("Commands:")
        print("  collect   Calibrate and format every annotation in a project file")
        print()
        return 0

    command, rest = argv[0], argv[1:]

    if command == "collect":
        return collect_main(rest)

    print(f"Unknown command: {command}")
    print("Run 'calimeasure --help' for usage")
    return 1


if __name__ == "__main__":
    sys.exit(main())
