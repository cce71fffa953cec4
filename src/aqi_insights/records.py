# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
records.py — Validated air-quality measurement records.

Every record is checked at ingestion: the analysis functions only ever see
MeasurementRecord instances, never raw dicts.
"""

from __future__ import annotations

import csv
import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

REQUIRED_FIELDS = ("date", "aqi", "pm25")


class MalformedRecordError(ValueError):
    """Raised when an input record cannot be turned into a MeasurementRecord."""

    def __init__(self, index: int, field: str, reason: str) -> None:
        self.index = index
        self.field = field
        self.reason = reason
        super().__init__(f"Record {index}: invalid '{field}' — {reason}")


@dataclass(frozen=True)
class MeasurementRecord:
    date: date
    aqi: float
    pm25: float


def _parse_date(value: Any, index: int) -> date:
    """Return the calendar date for a date, datetime or ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedRecordError(index, "date", f"expected a date string, got {type(value).__name__}")

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # Full timestamps: keep the calendar date as written
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise MalformedRecordError(index, "date", f"unparseable date {value!r}") from None


def _parse_number(value: Any, field: str, index: int) -> float:
    # bool is an int subclass; True/False is never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRecordError(index, field, f"expected a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise MalformedRecordError(index, field, "number too large for a float") from None
    if not math.isfinite(number):
        raise MalformedRecordError(index, field, f"not a finite number: {value!r}")
    return number


def parse_record(raw: Mapping[str, Any], index: int = 0) -> MeasurementRecord:
    """Validate one raw record and return it as a MeasurementRecord.

    Args:
        raw: Mapping with keys date, aqi, pm25.
        index: Position of the record in its input, used in error messages.

    Raises:
        MalformedRecordError: If a field is missing, the date cannot be parsed,
            or aqi/pm25 is not a finite real number.
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(index, "record", f"expected an object, got {type(raw).__name__}")
    for field in REQUIRED_FIELDS:
        if field not in raw:
            raise MalformedRecordError(index, field, "missing")

    return MeasurementRecord(
        date=_parse_date(raw["date"], index),
        aqi=_parse_number(raw["aqi"], "aqi", index),
        pm25=_parse_number(raw["pm25"], "pm25", index),
    )


def load_records(raw_records: Iterable[Mapping[str, Any]]) -> list[MeasurementRecord]:
    """Validate raw records in order, failing on the first malformed one.

    Returns:
        List of MeasurementRecord in input order. Empty input gives [].

    Raises:
        MalformedRecordError: For the first record that fails validation.
    """
    return [parse_record(raw, i) for i, raw in enumerate(raw_records)]


def read_records_file(path: Path) -> list[MeasurementRecord]:
    """Load records from a .json or .csv file.

    JSON files hold either a list of objects or an object with a "records"
    list. CSV files need a header row with date, aqi and pm25 columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: For an unsupported file type or JSON layout.
        MalformedRecordError: For the first invalid record.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("records")
        if not isinstance(payload, list):
            raise ValueError(f"{path}: expected a list of records or an object with a 'records' list")
        return load_records(payload)

    if suffix == ".csv":
        # utf-8-sig drops the BOM that spreadsheet exports put before the header
        with open(path, newline="", encoding="utf-8-sig") as f:
            rows = list(csv.DictReader(f))
        return load_records(_coerce_csv_row(row, i) for i, row in enumerate(rows))

    raise ValueError(f"Unsupported records file type: {path.suffix or '(none)'} (use .json or .csv)")


def _coerce_csv_row(row: dict, index: int) -> dict:
    """Convert the numeric cells of a CSV row; CSV has no number type."""
    coerced = dict(row)
    for field in ("aqi", "pm25"):
        cell = row.get(field)
        if cell is None:
            continue
        try:
            coerced[field] = float(cell)
        except ValueError:
            raise MalformedRecordError(index, field, f"expected a number, got {cell!r}") from None
    return coerced
