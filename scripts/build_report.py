#!/usr/bin/env python
"""
Fee report - prices every SKU in a product CSV.

Usage:
    python scripts/build_report.py products.csv
"""
import sys
from pathlib import Path

import pandas as pd

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from fulfillment_fees.config.settings import get_settings
from fulfillment_fees.data.fee_report import build_fee_report


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)

    settings = get_settings()
    products = pd.read_csv(sys.argv[1])
    fees, report = build_fee_report(products, settings=settings)

    if report["status"] == "failed":
        print("❌ REPORT FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    settings.report_output.parent.mkdir(parents=True, exist_ok=True)
    fees.to_csv(settings.report_output, index=False)

    metrics = report["metrics"]
    print(f"Priced {metrics['priced_count']} of {metrics['row_count']} SKUs")
    print(f"Output: {settings.report_output}")
    print()
    print("Tier distribution:")
    for tier, count in metrics["tier_counts"].items():
        print(f"  {tier}: {count}")
    print(f"Total shipping fees: ${metrics['total_shipping_fees']:.2f}")
    print(f"Total monthly recurring fees: ${metrics['total_monthly_recurring_fees']:.2f}")

    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")
    for error in report["errors"]:
        print(f"  ERROR: {error}")


if __name__ == "__main__":
    main()
