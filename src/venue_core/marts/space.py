"""Space efficiency: revenue per square foot across activities, arcade and VR.

The arcade floor and the VR zone do not appear in the sales mix, so they are
added as synthetic rows whose revenue comes from the arcade machine readings
(credit plus bonus).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd

from venue_core.marts.activities import get_activity_revenue
from venue_core.schemas import ACTIVITY_SQFT, ARCADE_AREA_KEY, VR_AREA_KEY
from venue_core.utils import numeric_column, safe_divide, safe_ratio, text_column

logger = logging.getLogger(__name__)

SPACE_EFFICIENCY_COLUMNS = ["activity", "revenue", "quantity", "sqft", "revenue_per_sqft"]


def _machine_revenue(arcade: pd.DataFrame, game_type: str) -> float:
    mask = text_column(arcade, "game_type").str.strip().str.lower() == game_type
    credit = numeric_column(arcade, "credit")[mask].sum()
    bonus = numeric_column(arcade, "bonus")[mask].sum()
    return float(credit + bonus)


def get_space_efficiency(
    sales_mix: pd.DataFrame,
    arcade: pd.DataFrame,
    area_table: Mapping[str, float] = ACTIVITY_SQFT,
) -> pd.DataFrame:
    """Revenue per square foot for every activity with a known area.

    Args:
        sales_mix: Sales-mix records.
        arcade: Arcade machine readings.
        area_table: Activity -> floor area (square feet). The "Arcade" and
            "VR Zone" keys size the synthetic Arcade and VR rows.

    Returns:
        DataFrame with activity, revenue, quantity, sqft, revenue_per_sqft,
        restricted to rows with positive area and revenue, sorted by
        revenue_per_sqft descending.
    """
    activities = get_activity_revenue(sales_mix, area_table)[["activity", "revenue", "quantity"]]
    activities = activities.assign(
        sqft=activities["activity"].map(lambda a: float(area_table.get(a, 0) or 0)).astype(float)
    )

    synthetic = pd.DataFrame(
        {
            "activity": ["Arcade", "VR"],
            "revenue": [_machine_revenue(arcade, "arcade"), _machine_revenue(arcade, "vr")],
            "quantity": [0.0, 0.0],
            "sqft": [
                float(area_table.get(ARCADE_AREA_KEY, 0) or 0),
                float(area_table.get(VR_AREA_KEY, 0) or 0),
            ],
        }
    )

    frames = [f for f in (activities, synthetic) if not f.empty]
    combined = pd.concat(frames, ignore_index=True)
    combined = combined[(combined["sqft"] > 0) & (combined["revenue"] > 0)].copy()
    combined["revenue_per_sqft"] = safe_ratio(combined["revenue"], combined["sqft"])

    logger.debug("Space efficiency computed for %d areas", len(combined))
    return (
        combined[SPACE_EFFICIENCY_COLUMNS]
        .sort_values("revenue_per_sqft", ascending=False, kind="stable")
        .reset_index(drop=True)
    )


@dataclass
class SpaceEfficiencySummary:
    """Headline figures for the space efficiency page.

    Attributes:
        top: The best ``n`` rows, best first.
        bottom: The worst ``n`` rows, worst first.
        total_revenue: Sum of revenue over all rows.
        total_sqft: Sum of floor area over all rows.
        avg_revenue_per_sqft: total_revenue / total_sqft (area-weighted, not
            the mean of per-row ratios).
        best: Activity with the highest ratio, or None.
        worst: Activity with the lowest ratio, or None.
    """

    top: pd.DataFrame
    bottom: pd.DataFrame
    total_revenue: float = 0.0
    total_sqft: float = 0.0
    avg_revenue_per_sqft: float = 0.0
    best: str | None = None
    worst: str | None = None


def summarize_space_efficiency(efficiency: pd.DataFrame, n: int = 3) -> SpaceEfficiencySummary:
    """Summarize the output of ``get_space_efficiency``."""
    total_revenue = float(efficiency["revenue"].sum()) if len(efficiency) else 0.0
    total_sqft = float(efficiency["sqft"].sum()) if len(efficiency) else 0.0

    return SpaceEfficiencySummary(
        top=efficiency.head(n).reset_index(drop=True),
        bottom=efficiency.tail(n).iloc[::-1].reset_index(drop=True),
        total_revenue=total_revenue,
        total_sqft=total_sqft,
        avg_revenue_per_sqft=safe_divide(total_revenue, total_sqft),
        best=str(efficiency["activity"].iloc[0]) if len(efficiency) else None,
        worst=str(efficiency["activity"].iloc[-1]) if len(efficiency) else None,
    )
