import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from fulfillment_fees.engine import (
    Category,
    CommercialContext,
    FeeEngine,
    PhysicalSpec,
    PlacementMode,
    StorageSeason,
)


def print_quote(engine, title, spec, context):
    print(f"\n--- {title} ---")
    result = engine.calculate(spec, context)
    print(f"Tier: {result.tier.label}")
    print(result.get_trace_text())
    print(f"Per-unit fees: ${result.total_per_unit_fees:.2f}")
    print(f"Monthly recurring: ${result.total_monthly_recurring_fee:.2f}")

    if result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"  {warning}")


def quote():
    engine = FeeEngine()

    print_quote(
        engine,
        "T-shirt (apparel, $29.99, minimal placement, peak)",
        PhysicalSpec(length=35, width=25, height=2, weight=0.25),
        CommercialContext(
            category=Category.APPAREL,
            price=29.99,
            placement_mode=PlacementMode.MINIMAL,
            storage_season=StorageSeason.PEAK,
        ),
    )

    print_quote(
        engine,
        "Phone case (standard, $8.99)",
        PhysicalSpec(length=15, width=8, height=1.5, weight=0.05),
        CommercialContext(price=8.99),
    )


if __name__ == "__main__":
    quote()
