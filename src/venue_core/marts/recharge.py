"""Recharge marts: slabs, spender tiers, card issuance and cashiers.

A recharge record is one cashier transaction: a card issue or a top-up at a
given ``recharge_level`` (the face value of the package sold), with
``quantity`` cards and ``amount`` collected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from venue_core.schemas import GRAND_TOTAL, RECHARGE_SLABS, SPENDER_SEGMENTS, VARIABLE_SLAB
from venue_core.utils import group_sum, numeric_column, safe_divide, safe_ratio, sort_desc, text_column

logger = logging.getLogger(__name__)

SLAB_COLUMNS = ["slab", "revenue", "quantity", "count"]
SEGMENT_COLUMNS = ["segment", "revenue", "quantity", "count"]

CARD_ISSUE_MARKER = "CARD ISSUE"
RECHARGE_CARD_MARKER = "RECHARGE CARD"


def _transactions(recharge: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "level": numeric_column(recharge, "recharge_level"),
            "revenue": numeric_column(recharge, "amount"),
            "quantity": numeric_column(recharge, "quantity"),
            "count": 1,
        },
        index=recharge.index,
    )


def slab_label(level: float, slabs: Sequence[int] = RECHARGE_SLABS) -> str:
    """Bucket a recharge level: an exact standard slab, else "Variable".

    Examples:
        >>> slab_label(3000)
        '3000'
        >>> slab_label(2500)
        'Variable'
    """
    for slab in slabs:
        if level == slab:
            return str(slab)
    return VARIABLE_SLAB


def get_recharge_by_slab(
    recharge: pd.DataFrame,
    slabs: Sequence[int] = RECHARGE_SLABS,
) -> pd.DataFrame:
    """Revenue, quantity and transaction count per recharge slab.

    Only slabs that received at least one record are returned, in slab order
    with "Variable" last.
    """
    tx = _transactions(recharge)
    tx["slab"] = tx["level"].map(lambda v: slab_label(v, slabs))

    grouped = group_sum(tx, "slab", ["revenue", "quantity", "count"])
    order = {label: i for i, label in enumerate([*map(str, slabs), VARIABLE_SLAB])}
    grouped["_order"] = grouped["slab"].map(order)
    return (
        grouped.sort_values("_order", kind="stable")[SLAB_COLUMNS].reset_index(drop=True)
    )


def _segment_mask(levels: pd.Series, lower: float, lower_inclusive: bool, upper: float | None) -> pd.Series:
    mask = levels >= lower if lower_inclusive else levels > lower
    if upper is not None:
        mask &= levels <= upper
    return mask


def get_spender_segmentation(
    recharge: pd.DataFrame,
    segments: Sequence[tuple[str, float, bool, float | None]] = SPENDER_SEGMENTS,
) -> pd.DataFrame:
    """Split recharge revenue into low, mid and high spender tiers.

    With the default tiers a level of exactly 3000 is low and 3001 is mid.
    Levels below the lowest tier are not counted anywhere. Every tier is
    returned, with zeros when it has no records.
    """
    tx = _transactions(recharge)
    rows = []
    for name, lower, lower_inclusive, upper in segments:
        part = tx[_segment_mask(tx["level"], lower, lower_inclusive, upper)]
        rows.append(
            {
                "segment": name,
                "revenue": float(part["revenue"].sum()),
                "quantity": float(part["quantity"].sum()),
                "count": int(len(part)),
            }
        )
    return pd.DataFrame(rows, columns=SEGMENT_COLUMNS)


@dataclass
class CardIssuanceMetrics:
    """New-card vs recharge-card activity.

    Counts come from the daily Sales records; revenue comes from the
    Recharge transactions.

    Attributes:
        new_cards: Cards issued.
        recharge_cards: Cards topped up.
        total_cards: new_cards + recharge_cards.
        recharge_percentage: recharge_cards / total_cards * 100.
        new_card_revenue: Amount on transactions typed as a card issue.
        recharge_card_revenue: Amount on transactions typed as a card recharge.
    """

    new_cards: float = 0.0
    recharge_cards: float = 0.0
    total_cards: float = 0.0
    recharge_percentage: float = 0.0
    new_card_revenue: float = 0.0
    recharge_card_revenue: float = 0.0


def get_card_issuance_metrics(sales: pd.DataFrame, recharge: pd.DataFrame) -> CardIssuanceMetrics:
    """Card counts from Sales and card revenue from Recharge by exact type marker."""
    new_cards = float(numeric_column(sales, "new_cards").sum())
    recharge_cards = float(numeric_column(sales, "recharge_cards").sum())
    total_cards = new_cards + recharge_cards

    kind = text_column(recharge, "recharge_type")
    amount = numeric_column(recharge, "amount")

    return CardIssuanceMetrics(
        new_cards=new_cards,
        recharge_cards=recharge_cards,
        total_cards=total_cards,
        recharge_percentage=safe_divide(recharge_cards, total_cards) * 100,
        new_card_revenue=float(amount[kind.str.contains(CARD_ISSUE_MARKER, regex=False)].sum()),
        recharge_card_revenue=float(
            amount[kind.str.contains(RECHARGE_CARD_MARKER, regex=False)].sum()
        ),
    )


def recharge_type_label(recharge_type: str) -> str:
    """Short display label for a recharge type.

    Examples:
        >>> recharge_type_label("CARD ISSUE")
        'Issue'
        >>> recharge_type_label("RECHARGE CARD")
        'Recharge'
    """
    label = recharge_type.replace("CARD", "", 1)
    label = label.replace("ISSUE", "Issue").replace("RECHARGE", "Recharge")
    return label.strip()


def get_recharge_type_breakdown(recharge: pd.DataFrame) -> pd.DataFrame:
    """Revenue, quantity and count per recharge type.

    Returns:
        DataFrame with recharge_type, label, revenue, quantity, count in
        first-seen order. Blank and "GRAND TOTAL" types are skipped.
    """
    tx = _transactions(recharge)
    tx["recharge_type"] = text_column(recharge, "recharge_type").str.strip()
    tx = tx[(tx["recharge_type"] != "") & (tx["recharge_type"] != GRAND_TOTAL)]

    grouped = group_sum(tx, "recharge_type", ["revenue", "quantity", "count"])
    grouped.insert(1, "label", grouped["recharge_type"].map(recharge_type_label))
    return grouped


def get_cashier_performance(recharge: pd.DataFrame) -> pd.DataFrame:
    """Per-cashier revenue, quantity, transaction count and average ticket."""
    tx = _transactions(recharge)
    tx["cashier"] = text_column(recharge, "cashier").str.strip()
    tx = tx[tx["cashier"] != ""]

    grouped = group_sum(tx, "cashier", ["revenue", "quantity", "count"])
    grouped["avg_transaction"] = safe_ratio(grouped["revenue"], grouped["count"])
    logger.debug("Cashier performance: %d cashiers", len(grouped))
    return sort_desc(grouped, "revenue")


@dataclass
class RechargeSummary:
    """Headline recharge KPIs."""

    total_revenue: float = 0.0
    entries: int = 0
    total_cards: float = 0.0
    avg_per_entry: float = 0.0
    avg_per_card: float = 0.0
    top_slab: str | None = None
    top_slab_revenue: float = 0.0


def get_recharge_summary(
    recharge: pd.DataFrame,
    slabs: Sequence[int] = RECHARGE_SLABS,
) -> RechargeSummary:
    """Headline recharge figures and the top-earning slab."""
    tx = _transactions(recharge)
    total_revenue = float(tx["revenue"].sum())
    total_cards = float(tx["quantity"].sum())
    entries = len(tx)

    by_slab = get_recharge_by_slab(recharge, slabs)
    top_slab, top_revenue = None, 0.0
    if not by_slab.empty:
        best = by_slab.loc[by_slab["revenue"].idxmax()]
        top_slab, top_revenue = str(best["slab"]), float(best["revenue"])

    return RechargeSummary(
        total_revenue=total_revenue,
        entries=entries,
        total_cards=total_cards,
        avg_per_entry=safe_divide(total_revenue, entries),
        avg_per_card=safe_divide(total_revenue, total_cards),
        top_slab=top_slab,
        top_slab_revenue=top_revenue,
    )
