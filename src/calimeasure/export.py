"""
Flat export of measurement records.

One row per record, same columns for every kind so mixed lists can be
written to a single table.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from .types import AngleRecord, DistanceRecord, MeasurementRecord, PositionRecord

CSV_COLUMNS = ("kind", "name", "value", "x", "y", "display")


def record_to_row(record: MeasurementRecord) -> dict:
    """
    Convert a record to a dict keyed by CSV_COLUMNS.

    Columns that do not apply to the record's kind are empty strings.
    """
    if not isinstance(record, (PositionRecord, DistanceRecord, AngleRecord)):
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    row = dict.fromkeys(CSV_COLUMNS, "")
    row["kind"] = record.kind
    row["name"] = record.name

    if isinstance(record, PositionRecord):
        row["x"] = record.x
        row["y"] = record.y
        row["display"] = f"{record.x_display}; {record.y_display}"
    else:
        row["value"] = record.value
        row["display"] = record.value_display

    return row


def write_csv(records: Iterable[MeasurementRecord], path: Path) -> int:
    """
    Write records to a CSV file.

    Args:
        records: Records to export
        path: Output .csv path

    Returns:
        Number of rows written (excluding header)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record_to_row(record))
            count += 1

    return count
