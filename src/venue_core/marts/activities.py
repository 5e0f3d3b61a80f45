"""Activity marts: revenue ranking, top variants and per-activity trends.

Activity names in the sales mix are typed by hand and vary in case and
spacing ("Bowling ", "BOWLING"). They are canonicalized against the keys of
the area table before grouping, so variants of the same activity merge into
one row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import pandas as pd

from venue_core.schemas import ACTIVITY_SQFT, GRAND_TOTAL
from venue_core.utils import (
    collapse_whitespace,
    date_labels,
    group_sum,
    numeric_column,
    safe_ratio,
    sort_desc,
    text_column,
)

logger = logging.getLogger(__name__)

ACTIVITY_REVENUE_COLUMNS = ["activity", "revenue", "quantity", "revenue_per_sqft"]


def normalize_activity_name(
    name: object,
    area_table: Mapping[str, float] = ACTIVITY_SQFT,
) -> str:
    """Canonicalize an activity name.

    Whitespace is trimmed and collapsed, then the first area-table key equal
    to the name case-insensitively is returned. Names without a matching key
    are returned cleaned but otherwise unchanged.

    Examples:
        >>> normalize_activity_name("  Bowling ")
        'BOWLING'
        >>> normalize_activity_name("laser   tag")
        'Laser Tag'
        >>> normalize_activity_name("Go Karts")
        'Go Karts'
    """
    cleaned = collapse_whitespace(name)
    lowered = cleaned.lower()
    for key in area_table:
        if key.lower() == lowered:
            return key
    return cleaned


def _canonical_activities(sales_mix: pd.DataFrame, area_table: Mapping[str, float]) -> pd.Series:
    return text_column(sales_mix, "activity").map(lambda a: normalize_activity_name(a, area_table))


def get_activity_revenue(
    sales_mix: pd.DataFrame,
    area_table: Mapping[str, float] = ACTIVITY_SQFT,
) -> pd.DataFrame:
    """Rank activities by revenue.

    Rows with a blank or "GRAND TOTAL" activity are skipped. Revenue and
    quantity are summed per canonical activity; ``revenue_per_sqft`` is
    revenue over the activity's floor area, or 0 when the area is unknown.
    Activities without positive revenue are dropped.

    Args:
        sales_mix: Sales-mix records.
        area_table: Activity -> floor area (square feet).

    Returns:
        DataFrame with columns activity, revenue, quantity, revenue_per_sqft,
        sorted by revenue descending (ties keep first-seen order).
    """
    frame = pd.DataFrame(
        {
            "activity": _canonical_activities(sales_mix, area_table),
            "revenue": numeric_column(sales_mix, "revenue"),
            "quantity": numeric_column(sales_mix, "quantity"),
        }
    )
    frame = frame[(frame["activity"] != "") & (frame["activity"] != GRAND_TOTAL)]

    grouped = group_sum(frame, "activity", ["revenue", "quantity"])
    sqft = grouped["activity"].map(lambda a: float(area_table.get(a, 0) or 0)).astype(float)
    grouped["revenue_per_sqft"] = safe_ratio(grouped["revenue"], sqft.where(sqft > 0, 0.0))

    grouped = grouped[grouped["revenue"] > 0]
    logger.debug("Activity revenue: %d activities from %d rows", len(grouped), len(sales_mix))
    return sort_desc(grouped[ACTIVITY_REVENUE_COLUMNS], "revenue")


def get_top_variants(sales_mix: pd.DataFrame, limit: int = 15) -> pd.DataFrame:
    """Best-selling activity/variant pairs.

    Returns:
        DataFrame with activity, variant, revenue, quantity, avg_revenue
        (revenue per unit, 0 when no units), top ``limit`` rows by revenue.
    """
    frame = pd.DataFrame(
        {
            "activity": text_column(sales_mix, "activity"),
            "variant": text_column(sales_mix, "variant"),
            "revenue": numeric_column(sales_mix, "revenue"),
            "quantity": numeric_column(sales_mix, "quantity"),
        }
    )
    frame = frame[(frame["activity"] != "") & (frame["variant"] != "")]

    grouped = group_sum(frame, ["activity", "variant"], ["revenue", "quantity"])
    grouped["avg_revenue"] = safe_ratio(grouped["revenue"], grouped["quantity"])
    return sort_desc(grouped, "revenue").head(limit).reset_index(drop=True)


def get_activity_time_series(sales_mix: pd.DataFrame, activity: str) -> pd.DataFrame:
    """Daily revenue and quantity for a single activity.

    The activity is matched against trimmed record names case-insensitively.

    Returns:
        DataFrame with date, revenue, quantity sorted by date label.
    """
    target = collapse_whitespace(activity).lower()
    names = text_column(sales_mix, "activity").map(collapse_whitespace).str.lower()
    subset = sales_mix.loc[names == target]

    frame = pd.DataFrame(
        {
            "date": date_labels(subset),
            "revenue": numeric_column(subset, "revenue"),
            "quantity": numeric_column(subset, "quantity"),
        }
    )
    frame = frame[frame["date"] != ""]
    grouped = group_sum(frame, "date", ["revenue", "quantity"])
    return grouped.sort_values("date", kind="stable").reset_index(drop=True)
