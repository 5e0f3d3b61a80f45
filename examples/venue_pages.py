"""Example: Page-level marts

This demonstrates the marts behind each report page, run against
snapshots that already exist under data/.
"""

from pathlib import Path

from venue_core import DataPaths, MachineThresholds, load_dataset
from venue_core.filters import filter_by_game_type
from venue_core.formatting import format_currency
from venue_core.marts import activities, arcade, combos, parties, recharge, space

paths = DataPaths.from_root(Path("data"))
dataset = load_dataset(paths)

# Activities
print("Top activities")
print("-" * 60)
print(activities.get_activity_revenue(dataset.sales_mix).head(10))
print(activities.get_top_variants(dataset.sales_mix, limit=5))

# Space efficiency
print("\nSpace efficiency")
print("-" * 60)
efficiency = space.get_space_efficiency(dataset.sales_mix, dataset.arcade)
summary = space.summarize_space_efficiency(efficiency)
print(efficiency)
print(f"Venue average: {format_currency(summary.avg_revenue_per_sqft)} per sqft")

# Combos
print("\nCombos")
print("-" * 60)
metrics = combos.get_combo_metrics(dataset.sales_mix)
print(f"Combo share: {metrics.combo_percent:.1f}%")
if metrics.has_valid_data:
    print(f"Combo uplift: {metrics.value_uplift_percent:.0f}%")
print(combos.get_low_performing_combos(dataset.sales_mix, limit=5))

# Arcade, stricter than the defaults
print("\nArcade machines")
print("-" * 60)
thresholds = MachineThresholds(low_revenue=2000.0, high_bonus_ratio=0.4)
machines = arcade.get_machine_performance(
    filter_by_game_type(dataset.arcade, "Arcade"), thresholds
)
print(machines[machines["flag"] != ""])
print(arcade.get_arcade_summary(machines))

# Recharge
print("\nRecharge")
print("-" * 60)
print(recharge.get_recharge_by_slab(dataset.recharge))
print(recharge.get_spender_segmentation(dataset.recharge))
print(recharge.get_cashier_performance(dataset.recharge).head(5))

# Parties
print("\nParties")
print("-" * 60)
print(parties.get_party_metrics(dataset.sales))
print(parties.get_day_wise_parties(dataset.sales))
