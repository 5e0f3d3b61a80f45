"""Venue workbook -> JSON snapshots.

This module reads the operator's master spreadsheet and writes the four
JSON snapshots consumed by ``venue_core.loaders``.

The workbook has four sheets with different layouts:
1. "Sales data": no usable header; the first data row is located by
   content (a serial date followed by a month name) and fields are taken
   from fixed column positions
2. "Sales mix": title row, then headers on the second row
3. "Recharge data": headers on the first row
4. "ARCADE": title row, then headers on the second row

Subtotal rows and rows without a date or key field are dropped, and every
record gets a ``date_iso`` string.

Examples:
    python -m venue_core.ingest.workbook ./VENUE_DATA.xlsx --outdir ./data

    venue-ingest ./VENUE_DATA.xlsx --outdir ./data --quiet
"""

from __future__ import annotations

import argparse
import calendar
import logging
import numbers
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from venue_core.config import DataPaths
from venue_core.exceptions import IngestionError
from venue_core.loaders import get_schema, normalize_records
from venue_core.schemas import normalize_header
from venue_core.utils import EXCEL_EPOCH, is_missing

logger = logging.getLogger(__name__)

SALES_SHEET = "Sales data"
SALES_MIX_SHEET = "Sales mix"
RECHARGE_SHEET = "Recharge data"
ARCADE_SHEET = "ARCADE"

# dataset -> (sheet, header row); None means located by content
SHEET_LAYOUT: dict[str, tuple[str, int | None]] = {
    "sales": (SALES_SHEET, None),
    "sales_mix": (SALES_MIX_SHEET, 1),
    "recharge": (RECHARGE_SHEET, 0),
    "arcade": (ARCADE_SHEET, 1),
}

# canonical column -> 0-based column index on the "Sales data" sheet
SALES_COLUMN_POSITIONS: dict[str, int] = {
    "date": 0,
    "month": 1,
    "day": 2,
    "game_revenue": 3,
    "arcade_credit": 6,
    "arcade_bonus": 7,
    "food_revenue": 9,
    "footfall": 10,
    "new_cards": 12,
    "recharge_cards": 13,
    "party_game_revenue": 21,
    "party_food_revenue": 22,
    "party_count": 23,
}

MONTH_NAMES = frozenset(m.lower() for m in calendar.month_name if m)


# --------------------------- cell helpers ---------------------------
def to_excel_serial(value: Any) -> float | None:
    """Return a cell value as an Excel serial day number, or None.

    openpyxl yields date-formatted cells as datetimes; plain numeric cells
    are already serials.
    """
    if is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return float((value - EXCEL_EPOCH).days)
    if isinstance(value, numbers.Real):
        return float(value)
    return None


def _is_month_name(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in MONTH_NAMES


def find_sheet(xls: pd.ExcelFile, target: str) -> str:
    """Find a sheet by name, ignoring case and surrounding whitespace.

    Raises:
        IngestionError: If no sheet matches.
    """
    t = target.strip().lower()
    for name in xls.sheet_names:
        if str(name).strip().lower() == t:
            return name
    raise IngestionError(f"Sheet '{target}' not found. Available: {xls.sheet_names}")


def detect_first_data_row(raw: pd.DataFrame) -> int | None:
    """Index of the first row holding a serial date followed by a month name."""
    for i in range(len(raw)):
        row = raw.iloc[i]
        if len(row) < 2:
            continue
        serial = to_excel_serial(row.iloc[0])
        if serial is not None and serial > 0 and _is_month_name(row.iloc[1]):
            return i
    return None


# --------------------------- sheet readers ---------------------------
def read_sales_sheet(xls: pd.ExcelFile) -> pd.DataFrame:
    """Read the headerless "Sales data" sheet by fixed column positions."""
    sheet = find_sheet(xls, SALES_SHEET)
    raw = pd.read_excel(xls, sheet_name=sheet, header=None)

    start = detect_first_data_row(raw)
    if start is None:
        raise IngestionError(
            f"Could not locate the first data row on sheet '{sheet}' "
            "(expected a serial date followed by a month name)"
        )

    records = []
    for i in range(start, len(raw)):
        row = raw.iloc[i]
        serial = to_excel_serial(row.iloc[0])
        if serial is None or serial <= 0:
            continue
        record = {
            col: (row.iloc[pos] if pos < len(row) else None)
            for col, pos in SALES_COLUMN_POSITIONS.items()
        }
        record["date"] = serial
        records.append(record)

    logger.debug("Sheet '%s': header row %d, %d data rows", sheet, start - 1, len(records))
    return normalize_records(pd.DataFrame.from_records(records), "sales")


def read_header_sheet(xls: pd.ExcelFile, dataset: str) -> pd.DataFrame:
    """Read a sheet with a header row and keep rows that have a date and key."""
    sheet_name, header_row = SHEET_LAYOUT[dataset]
    sheet = find_sheet(xls, sheet_name)
    frame = pd.read_excel(xls, sheet_name=sheet, header=header_row)

    for col in frame.columns:
        if normalize_header(col) == "DATE":
            frame[col] = frame[col].map(to_excel_serial)

    records = normalize_records(frame, dataset)
    key = get_schema(dataset).key_column
    keep = records["date"] > 0
    if key:
        keep &= records[key] != ""
    dropped = int((~keep).sum())
    if dropped:
        logger.debug("Sheet '%s': dropped %d rows without a date or %s", sheet, dropped, key)
    return records.loc[keep].reset_index(drop=True)


def read_workbook(path: Path) -> dict[str, pd.DataFrame]:
    """Read all four datasets from the workbook.

    Raises:
        FileNotFoundError: If the workbook does not exist.
        IngestionError: If a sheet is missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")

    with pd.ExcelFile(path, engine="openpyxl") as xls:
        return {
            "sales": read_sales_sheet(xls),
            "sales_mix": read_header_sheet(xls, "sales_mix"),
            "recharge": read_header_sheet(xls, "recharge"),
            "arcade": read_header_sheet(xls, "arcade"),
        }


def write_snapshot(df: pd.DataFrame, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", indent=2, force_ascii=False)


def ingest_workbook(workbook: Path, outdir: Path) -> dict[str, Path]:
    """Convert the workbook into the four JSON snapshots under ``outdir``.

    Returns:
        Dataset name -> written snapshot path.
    """
    paths = DataPaths.from_root(outdir, workbook)
    paths.ensure_dirs()

    logger.info("Processing %s", workbook)
    written = {}
    for dataset, df in read_workbook(workbook).items():
        out_path = paths.snapshot_path(dataset)
        write_snapshot(df, out_path)
        logger.info("Wrote %s (%d records)", out_path, len(df))
        written[dataset] = out_path
    return written


# --------------------------- CLI ---------------------------
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert the venue workbook into JSON snapshots")
    p.add_argument("workbook", type=Path, help="Path to the .xlsx workbook")
    p.add_argument(
        "--outdir",
        type=Path,
        default=Path("data"),
        help="Where to write the JSON snapshots",
    )
    p.add_argument("--quiet", action="store_true", help="Less logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.workbook.exists():
        raise SystemExit(f"Workbook not found: {args.workbook}")

    try:
        ingest_workbook(args.workbook, args.outdir)
    except IngestionError as e:
        raise SystemExit(str(e)) from e


if __name__ == "__main__":
    main()
