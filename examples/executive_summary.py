"""Example: Executive summary from the venue workbook

This example demonstrates the end-to-end flow:
1. Convert the operator's workbook into JSON snapshots
2. Load the snapshots and narrow them to selected months
3. Compute the overview KPIs and print them with Indian number formatting

Prerequisites:
- Place the master workbook at VENUE_DATA.xlsx (or modify the path below)
"""

from pathlib import Path

from venue_core import DataPaths, load_dataset
from venue_core.formatting import format_indian_number, format_number
from venue_core.ingest import ingest_workbook
from venue_core.marts import sales
from venue_core.qa import run_sales_qa

paths = DataPaths.from_root(Path("data"), Path("VENUE_DATA.xlsx"))

# Rebuild the snapshots from the workbook
ingest_workbook(paths.workbook, paths.data_root)

dataset = load_dataset(paths)
print(f"Months available: {dataset.months}")

selected = dataset.filter_by_month(["September"])  # MODIFY AS NEEDED

qa_result = run_sales_qa(selected.sales)
if qa_result.has_issues:
    print("QA issues found:")
    print(f"  - Duplicate dates: {qa_result.summary['duplicate_dates_count']}")
    print(f"  - Unknown day names: {qa_result.summary['unknown_days_count']}")

kpis = sales.get_executive_kpis(
    selected.sales, selected.recharge, selected.arcade, selected.sales_mix
)

print("\nExecutive Summary:")
print(f"  - Total revenue: {format_indian_number(kpis.total_revenue)}")
print(f"  - Footfall: {format_number(kpis.total_footfall)}")
print(f"  - Revenue per visitor: {format_indian_number(kpis.revenue_per_footfall)}")
print(f"  - Weekend share: {kpis.weekend_revenue_percent:.0f}%")
print(f"  - Food share: {kpis.food_percentage:.1f}%")
print(f"  - Arcade bonus/credit: {kpis.bonus_credit_percent:.1f}%")
print(f"  - Parties: {kpis.total_parties:.0f} (avg {format_indian_number(kpis.avg_party_revenue)})")
print(f"  - Combo revenue: {format_indian_number(kpis.combo_revenue)}")
print(f"  - Card retention: {kpis.cards.recharge_percentage:.1f}%")

print("\nDay-of-week profile:")
print(sales.get_day_of_week_performance(selected.sales))
