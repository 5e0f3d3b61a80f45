"""Shared utilities for the venue_core marts.

This module provides the small helpers every mart relies on:

- Safe division: scalar and column-wise, returning 0 for a zero denominator
- Column coercion: numeric columns with nulls as 0, text columns with nulls as ""
- Date helpers: Excel serial day numbers to ISO strings and short labels

Examples:
    >>> from venue_core.utils import safe_divide, excel_serial_to_iso
    >>> safe_divide(10, 0)
    0.0
    >>> excel_serial_to_iso(45170)
    '2023-09-01'

"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Any

import numpy as np
import pandas as pd

# Excel's day 0 (accounts for the 1900 leap-year bug)
EXCEL_EPOCH = date(1899, 12, 30)

_WHITESPACE_RE = re.compile(r"\s+")


def is_missing(value: Any) -> bool:
    """True for None, NaN, NaT and pd.NA."""
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero, null or not finite.

    Examples:
        >>> safe_divide(800, 300)
        2.6666666666666665
        >>> safe_divide(5, 0)
        0.0
    """
    if denominator is None or pd.isna(denominator) or denominator == 0:
        return 0.0
    result = float(numerator) / float(denominator)
    return result if np.isfinite(result) else 0.0


def safe_ratio(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Element-wise division with 0.0 wherever the denominator is zero."""
    den = denominator.astype(float)
    num = numerator.astype(float)
    out = num.div(den.where(den != 0))
    return out.replace([np.inf, -np.inf], np.nan).fillna(0.0)


def numeric_column(df: pd.DataFrame, column: str) -> pd.Series:
    """Return a float column with missing or unparseable values as 0.0.

    A column absent from the frame yields a zero series aligned to its index.
    """
    if column not in df.columns:
        return pd.Series(0.0, index=df.index, dtype=float)
    return pd.to_numeric(df[column], errors="coerce").fillna(0.0).astype(float)


def text_column(df: pd.DataFrame, column: str) -> pd.Series:
    """Return a string column with nulls as "" (values are not trimmed)."""
    if column not in df.columns:
        return pd.Series("", index=df.index, dtype=object)
    return df[column].map(lambda v: "" if is_missing(v) else str(v)).astype(object)


def collapse_whitespace(text: Any) -> str:
    """Trim and collapse internal runs of whitespace to a single space."""
    if is_missing(text):
        return ""
    return _WHITESPACE_RE.sub(" ", str(text)).strip()


def excel_serial_to_date(serial: Any) -> date | None:
    """Convert an Excel serial day number to a date, or None if not a number."""
    if serial is None or isinstance(serial, bool):
        return None
    try:
        value = float(serial)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(value) or value <= 0:
        return None
    return EXCEL_EPOCH + timedelta(days=int(value))


def excel_serial_to_iso(serial: Any) -> str | None:
    """Convert an Excel serial day number to a YYYY-MM-DD string."""
    d = excel_serial_to_date(serial)
    return d.isoformat() if d else None


def format_short_date(serial: Any) -> str | None:
    """Format an Excel serial as a short label like 'Sep 05'."""
    d = excel_serial_to_date(serial)
    return d.strftime("%b %d") if d else None


def date_labels(df: pd.DataFrame) -> pd.Series:
    """Per-row date label used by the daily trend marts.

    Prefers the precomputed ``date_iso`` string and falls back to a short
    label derived from the serial ``date``. Rows with neither get "".
    """
    iso = text_column(df, "date_iso").str.strip()
    serial = df["date"] if "date" in df.columns else pd.Series(None, index=df.index, dtype=object)
    fallback = serial.map(lambda v: format_short_date(v) or "")
    return iso.where(iso != "", fallback)


def group_sum(frame: pd.DataFrame, by: str | list[str], columns: list[str]) -> pd.DataFrame:
    """Sum ``columns`` per group, groups kept in first-encounter order.

    Returns a flat DataFrame (group keys as columns). An empty input yields
    an empty frame that still carries the key and value columns.
    """
    keys = [by] if isinstance(by, str) else list(by)
    if frame.empty:
        return pd.DataFrame(
            {c: pd.Series(dtype=float if c in columns else object) for c in keys + columns}
        )
    return frame.groupby(keys, sort=False, dropna=False)[columns].sum().reset_index()


def sort_desc(frame: pd.DataFrame, column: str) -> pd.DataFrame:
    """Stable descending sort; ties keep their current order."""
    return frame.sort_values(column, ascending=False, kind="stable").reset_index(drop=True)
