"""In-memory QA checks for the daily Sales collection.

The marts assume one Sales row per calendar date and canonical weekday
names in ``day``. These checks report violations without modifying or
rejecting the data; only a structurally unusable frame raises.

Example:
    >>> from venue_core import DataPaths, load_dataset
    >>> from venue_core.qa import run_sales_qa
    >>>
    >>> dataset = load_dataset(DataPaths.from_root("data"))
    >>> result = run_sales_qa(dataset.sales)
    >>> if result.has_issues:
    ...     print(result.duplicate_dates)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from venue_core.exceptions import DataQualityError
from venue_core.schemas import DAY_ORDER
from venue_core.utils import numeric_column, text_column

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["date", "day", "game_revenue", "food_revenue", "footfall"]

NON_NEGATIVE_COLUMNS = [
    "game_revenue",
    "food_revenue",
    "footfall",
    "party_game_revenue",
    "party_food_revenue",
    "party_count",
]


@dataclass
class SalesQAResult:
    """Result of the Sales QA checks.

    Attributes:
        summary: Dictionary with counts and flags.
        duplicate_dates: Rows sharing a date with another row, or None if none found.
        unknown_days: Rows whose ``day`` is not a weekday name, or None if none found.
    """

    summary: dict
    duplicate_dates: pd.DataFrame | None
    unknown_days: pd.DataFrame | None

    @property
    def has_issues(self) -> bool:
        return (
            self.duplicate_dates is not None
            or self.unknown_days is not None
            or bool(self.summary.get("schema_errors"))
        )


def detect_duplicate_dates(sales: pd.DataFrame) -> pd.DataFrame | None:
    """Rows whose serial date appears more than once (zero dates ignored)."""
    dated = sales[numeric_column(sales, "date") > 0]
    dupes = dated[dated.duplicated(subset=["date"], keep=False)]
    return dupes.sort_values("date", kind="stable") if not dupes.empty else None


def detect_unknown_days(sales: pd.DataFrame) -> pd.DataFrame | None:
    """Rows whose trimmed ``day`` is not one of Monday..Sunday."""
    names = text_column(sales, "day").str.strip()
    unknown = sales[~names.isin(DAY_ORDER)]
    return unknown if not unknown.empty else None


def run_sales_qa(sales: pd.DataFrame) -> SalesQAResult:
    """Run the Sales QA checks in memory.

    Args:
        sales: Canonical Sales records (see ``venue_core.schemas.SALES``).

    Returns:
        SalesQAResult with a summary and the offending rows per check.

    Raises:
        DataQualityError: If required columns are missing.
    """
    missing_cols = [col for col in REQUIRED_COLUMNS if col not in sales.columns]
    if missing_cols:
        raise DataQualityError(
            f"Missing required columns in sales: {missing_cols}. Required: {REQUIRED_COLUMNS}"
        )

    logger.info("Running sales QA for %d rows", len(sales))

    negative_errors = []
    for col in NON_NEGATIVE_COLUMNS:
        neg_count = int((numeric_column(sales, col) < 0).sum())
        if neg_count > 0:
            negative_errors.append(f"{col}: {neg_count} negative values")

    duplicate_dates = detect_duplicate_dates(sales)
    unknown_days = detect_unknown_days(sales)

    iso = text_column(sales, "date_iso").str.strip()
    iso = iso[iso != ""]
    summary = {
        "total_rows": len(sales),
        "min_date": iso.min() if not iso.empty else None,
        "max_date": iso.max() if not iso.empty else None,
        "has_duplicates": duplicate_dates is not None,
        "has_unknown_days": unknown_days is not None,
        "duplicate_dates_count": len(duplicate_dates) if duplicate_dates is not None else 0,
        "unknown_days_count": len(unknown_days) if unknown_days is not None else 0,
        "schema_errors": negative_errors,
    }

    logger.info(
        "Sales QA complete: %d duplicate-date rows, %d unknown-day rows",
        summary["duplicate_dates_count"],
        summary["unknown_days_count"],
    )
    return SalesQAResult(summary=summary, duplicate_dates=duplicate_dates, unknown_days=unknown_days)
