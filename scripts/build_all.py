#!/usr/bin/env python
"""
Build pipeline - validates the fee schedule and runs the golden tests.

Usage:
    python scripts/build_all.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from fulfillment_fees.engine.rate_tables import validate_table
from fulfillment_fees.engine.schedule import SCHEDULE_NAME, all_rate_tables


def main():
    print("=" * 60)
    print("FULFILLMENT FEE BUILD PIPELINE")
    print("=" * 60)
    print()

    # Validate static tables
    print(f"[1/2] Validating {SCHEDULE_NAME} rate tables...")
    tables = all_rate_tables()
    errors = []
    for name, table in tables.items():
        errors.extend(f"{name}: {e}" for e in validate_table(table))

    if errors:
        print("\n❌ BUILD FAILED")
        for error in errors:
            print(f"  ERROR: {error}")
        sys.exit(1)
    print(f"  {len(tables)} tables OK")

    print()
    print("[2/2] Running golden tests...")

    # Run tests
    import subprocess
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/test_golden_cases.py', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )

    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ BUILD COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
