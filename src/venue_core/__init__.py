"""Venue Core - analytics engine for a family entertainment centre.

This package turns the venue's daily operational spreadsheet into the
metrics behind its reporting pages: revenue by activity, space efficiency,
combo vs single packages, arcade machines, recharge behaviour, weekday
patterns and birthday parties.

Module Structure:
    venue_core.ingest: Workbook -> JSON snapshots (ingest.workbook)
    venue_core.loaders: JSON snapshots -> canonical DataFrames
    venue_core.filters: Month, date range and game-type selection
    venue_core.marts: Aggregations (activities, space, combos, arcade,
        recharge, sales, parties)
    venue_core.formatting: Indian-numbering display helpers
    venue_core.qa: Sales data quality checks
    venue_core.config: DataPaths and MachineThresholds

Quick Start:
    >>> from venue_core import DataPaths, load_dataset
    >>> from venue_core.marts import activities, space
    >>>
    >>> dataset = load_dataset(DataPaths.from_root("data"))
    >>> september = dataset.filter_by_month(["September"])
    >>>
    >>> top = activities.get_activity_revenue(september.sales_mix)
    >>> efficiency = space.get_space_efficiency(september.sales_mix, september.arcade)
    >>> print(space.summarize_space_efficiency(efficiency).avg_revenue_per_sqft)

Grain Reference:
    sales: one row per calendar day
    sales_mix: day x activity x package variant
    recharge: one row per card issue / recharge transaction
    arcade: day x machine
"""

__version__ = "0.1.0"

from venue_core.config import DataPaths, MachineThresholds
from venue_core.exceptions import ConfigError, DataQualityError, IngestionError, VenueCoreError
from venue_core.loaders import VenueDataset, load_dataset

__all__ = [
    "ConfigError",
    "DataPaths",
    "DataQualityError",
    "IngestionError",
    "MachineThresholds",
    "VenueCoreError",
    "VenueDataset",
    "__version__",
    "load_dataset",
]
