"""Combo vs single-activity classification of sales-mix packages.

Package (variant) names are free text with no grammar, so classification is
an ordered list of rules evaluated top to bottom; the first rule that
matches decides. Exclusion rules come first, so a name that mentions both a
recharge card and a combo is a single purchase. Names that match no rule
are single.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import pandas as pd

from venue_core.utils import (
    date_labels,
    group_sum,
    is_missing,
    numeric_column,
    safe_divide,
    safe_ratio,
    sort_desc,
    text_column,
)

logger = logging.getLogger(__name__)

COMBO = "combo"
SINGLE = "single"


@dataclass(frozen=True)
class VariantRule:
    """One step of the classification cascade.

    Attributes:
        name: Short identifier, used in logs and tests.
        verdict: COMBO or SINGLE.
        predicate: Called with the lower-cased variant name.
    """

    name: str
    verdict: str
    predicate: Callable[[str], bool]

    def matches(self, variant_lower: str) -> bool:
        return self.predicate(variant_lower)


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(n in text for n in needles)


def _contains_all(first: str, *alternatives: str) -> Callable[[str], bool]:
    return lambda text: first in text and any(a in text for a in alternatives)


def _leading_count(unit: str) -> Callable[[str], bool]:
    pattern = re.compile(rf"^\d+\s*{unit}")
    return lambda text: pattern.search(text) is not None


_MULTI_ACTIVITY_RE = re.compile(
    r"bowling.*/.*laser|laser.*/.*trampoline|trampoline.*/.*bowling|skyrider.*/.*gravity",
    re.IGNORECASE,
)

VARIANT_RULES: tuple[VariantRule, ...] = (
    # exclusions
    VariantRule("recharge card", SINGLE, _contains("card", "recharge")),
    VariantRule(
        "extra parent ticket",
        SINGLE,
        _contains("parent/guardian", "parent/gaurdian", "extra parent"),
    ),
    VariantRule("complimentary", SINGLE, _contains("complimentary")),
    VariantRule("merchandise", SINGLE, _contains("socks")),
    VariantRule("amenity", SINGLE, _contains("massage chair")),
    VariantRule("timed entry", SINGLE, _leading_count("min")),
    VariantRule("cricket overs", SINGLE, _leading_count("over")),
    VariantRule("shooting shots", SINGLE, _leading_count("shots")),
    VariantRule("shooting magazines", SINGLE, _leading_count("magazine")),
    # combos
    VariantRule("named combo", COMBO, _contains_all("combo", "thrill", "punch")),
    VariantRule("multi activity", COMBO, lambda text: _MULTI_ACTIVITY_RE.search(text) is not None),
    VariantRule("party bundle", COMBO, _contains_all("party", " + ")),
)


def classify_variant(variant: object, rules: Sequence[VariantRule] = VARIANT_RULES) -> str:
    """Classify a package name as COMBO or SINGLE.

    Examples:
        >>> classify_variant("Big Thrill Combo")
        'combo'
        >>> classify_variant("Recharge Card Combo Punch")
        'single'
        >>> classify_variant("30 min Trampoline")
        'single'
    """
    lowered = "" if is_missing(variant) else str(variant).lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.verdict
    return SINGLE


def label_combo_single(
    sales_mix: pd.DataFrame,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> pd.DataFrame:
    """Return a copy of the sales mix with a ``bucket`` column (combo/single)."""
    out = sales_mix.copy()
    out["bucket"] = text_column(sales_mix, "variant").map(lambda v: classify_variant(v, rules))
    return out


@dataclass
class ComboMetrics:
    """Combo vs single totals for the combos page.

    Attributes:
        combo_revenue: Revenue of combo packages.
        combo_quantity: Units of combo packages sold.
        single_revenue: Revenue of everything else.
        single_quantity: Units of everything else.
        total_revenue: combo_revenue + single_revenue.
        combo_percent: Combo share of total revenue (0-100).
        avg_combo_value: Revenue per combo unit, 0 when none were sold.
        avg_single_value: Revenue per single unit, 0 when none were sold.
        has_valid_data: True when both buckets have revenue.
    """

    combo_revenue: float = 0.0
    combo_quantity: float = 0.0
    single_revenue: float = 0.0
    single_quantity: float = 0.0
    total_revenue: float = 0.0
    combo_percent: float = 0.0
    avg_combo_value: float = 0.0
    avg_single_value: float = 0.0
    has_valid_data: bool = False

    @property
    def value_uplift_percent(self) -> float:
        """How much more a combo unit earns than a single unit, in percent."""
        if not self.has_valid_data or self.avg_single_value <= 0:
            return 0.0
        return (self.avg_combo_value / self.avg_single_value - 1) * 100


def get_combo_metrics(
    sales_mix: pd.DataFrame,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> ComboMetrics:
    """Split sales-mix revenue and units into combo and single buckets."""
    labelled = label_combo_single(sales_mix, rules)
    revenue = numeric_column(labelled, "revenue")
    quantity = numeric_column(labelled, "quantity")
    is_combo = labelled["bucket"] == COMBO

    combo_revenue = float(revenue[is_combo].sum())
    combo_quantity = float(quantity[is_combo].sum())
    single_revenue = float(revenue[~is_combo].sum())
    single_quantity = float(quantity[~is_combo].sum())
    total_revenue = combo_revenue + single_revenue

    logger.debug(
        "Combo split: %d combo rows, %d single rows", int(is_combo.sum()), int((~is_combo).sum())
    )
    return ComboMetrics(
        combo_revenue=combo_revenue,
        combo_quantity=combo_quantity,
        single_revenue=single_revenue,
        single_quantity=single_quantity,
        total_revenue=total_revenue,
        combo_percent=safe_divide(combo_revenue, total_revenue) * 100,
        avg_combo_value=safe_divide(combo_revenue, combo_quantity),
        avg_single_value=safe_divide(single_revenue, single_quantity),
        has_valid_data=combo_revenue > 0 and single_revenue > 0,
    )


def _combo_rows(sales_mix: pd.DataFrame, rules: Sequence[VariantRule]) -> pd.DataFrame:
    labelled = label_combo_single(sales_mix, rules)
    combos = labelled[labelled["bucket"] == COMBO]
    frame = pd.DataFrame(
        {
            "activity": text_column(combos, "activity"),
            "variant": text_column(combos, "variant"),
            "revenue": numeric_column(combos, "revenue"),
            "quantity": numeric_column(combos, "quantity"),
        }
    )
    return frame[frame["variant"] != ""]


def get_combo_table(
    sales_mix: pd.DataFrame,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> pd.DataFrame:
    """Every combo package with its totals.

    Returns:
        DataFrame with activity, variant, revenue, quantity, avg_value,
        sorted by revenue descending with zero-revenue packages last.
    """
    grouped = group_sum(_combo_rows(sales_mix, rules), ["activity", "variant"], ["revenue", "quantity"])
    grouped["avg_value"] = safe_ratio(grouped["revenue"], grouped["quantity"])

    earning = sort_desc(grouped[grouped["revenue"] != 0], "revenue")
    zero = grouped[grouped["revenue"] == 0]
    return pd.concat([earning, zero], ignore_index=True) if len(zero) else earning


def get_low_performing_combos(
    sales_mix: pd.DataFrame,
    limit: int = 10,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> pd.DataFrame:
    """The ``limit`` combo packages with the least revenue, lowest first."""
    grouped = group_sum(_combo_rows(sales_mix, rules), "variant", ["revenue", "quantity"])
    return (
        grouped.sort_values("revenue", kind="stable").head(limit).reset_index(drop=True)
    )


def get_combo_trend(
    sales_mix: pd.DataFrame,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> pd.DataFrame:
    """Daily revenue split into combo and single columns, sorted by date label."""
    labelled = label_combo_single(sales_mix, rules)
    frame = pd.DataFrame(
        {
            "date": date_labels(labelled),
            "bucket": labelled["bucket"],
            "revenue": numeric_column(labelled, "revenue"),
        }
    )
    frame = frame[frame["date"] != ""]
    if frame.empty:
        return pd.DataFrame(columns=["date", COMBO, SINGLE])

    trend = frame.pivot_table(
        index="date", columns="bucket", values="revenue", aggfunc="sum", fill_value=0.0
    )
    trend = trend.reindex(columns=[COMBO, SINGLE], fill_value=0.0)
    trend.columns.name = None
    return trend.sort_index().reset_index()
