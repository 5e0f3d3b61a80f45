"""Aggregation marts over the canonical record collections.

Every function takes already-filtered DataFrames and returns a new
DataFrame or a small result dataclass; inputs are never modified.

Example:
    >>> from venue_core.marts import combos, recharge
    >>>
    >>> metrics = combos.get_combo_metrics(dataset.sales_mix)
    >>> tiers = recharge.get_spender_segmentation(dataset.recharge)
"""

from venue_core.marts import activities, arcade, combos, parties, recharge, sales, space

__all__ = ["activities", "arcade", "combos", "parties", "recharge", "sales", "space"]
