"""
Fee Report Builder - resolves fees for every SKU in a product table.

Adds on top of the single-product engine:
- Per-row validation with errors collected instead of aborting
- Row-level context overrides (category, price, age, placement, season)
- Build report with tier distribution and totals
"""
import logging
from datetime import datetime
from typing import Optional

import pandas as pd
from pydantic import ValidationError

from ..config.settings import get_settings, Settings
from ..engine.fee_engine import FeeEngine
from ..engine.models import CommercialContext
from ..services.validation import FeeContextInput, ProductSpecInput

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['sku', 'length', 'width', 'height', 'weight']
CONTEXT_COLUMNS = ['category', 'price', 'inventory_age_days', 'placement_mode', 'storage_season']


def _clean(value):
    """Map pandas missing values to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def build_fee_report(
    products: pd.DataFrame,
    context: Optional[CommercialContext] = None,
    settings: Optional[Settings] = None,
) -> tuple[pd.DataFrame, dict]:
    """
    Resolve the full fee breakdown for every product row.

    Args:
        products: One row per SKU with dimensions in cm and weight in kg,
            optionally with per-row context columns
        context: Default commercial context for rows that omit a field
        settings: Optional settings override

    Returns:
        (fees DataFrame, report dictionary)
    """
    settings = settings or get_settings()
    engine = FeeEngine(settings)
    base_context = engine.resolve_context(context)

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "schedule": settings.schedule_name,
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    missing = [col for col in REQUIRED_COLUMNS if col not in products.columns]
    if missing:
        report["errors"].append(f"Missing required columns: {', '.join(missing)}")
        report["status"] = "failed"
        return pd.DataFrame(), report

    rows = []
    for index, record in enumerate(products.to_dict(orient='records'), start=1):
        sku = _clean(record['sku'])
        sku = str(sku).strip() if sku is not None else ""
        if not sku:
            msg = f"Row {index}: missing SKU"
            report["errors"].append(msg)
            logger.warning(msg)
            continue

        try:
            spec = ProductSpecInput(
                length=record['length'],
                width=record['width'],
                height=record['height'],
                weight=record['weight'],
            ).to_spec()
            overrides = {col: _clean(record.get(col)) for col in CONTEXT_COLUMNS}
            row_context = FeeContextInput(**overrides).to_context(base_context)
        except ValidationError as e:
            msg = f"SKU {sku}: {e.error_count()} invalid field(s): " + "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])} {err['msg']}" for err in e.errors()
            )
            report["errors"].append(msg)
            logger.warning(msg)
            continue

        breakdown = engine.calculate(spec, row_context)
        for warning in breakdown.warnings:
            report["warnings"].append(f"SKU {sku}: {warning}")

        row = {"sku": sku}
        row.update(breakdown.to_dict())
        rows.append(row)

    fees = pd.DataFrame(rows)

    report["metrics"]["row_count"] = len(products)
    report["metrics"]["priced_count"] = len(fees)
    report["metrics"]["error_count"] = len(report["errors"])
    if not fees.empty:
        report["metrics"]["tier_counts"] = {
            tier: int(count) for tier, count in fees['tier'].value_counts().items()
        }
        report["metrics"]["total_shipping_fees"] = round(float(fees['shipping_fee'].sum()), 2)
        report["metrics"]["total_monthly_recurring_fees"] = round(
            float(fees['total_monthly_recurring_fee'].sum()), 2
        )
    else:
        report["metrics"]["tier_counts"] = {}
        report["metrics"]["total_shipping_fees"] = 0.0
        report["metrics"]["total_monthly_recurring_fees"] = 0.0

    report["status"] = "success" if not report["errors"] else "partial"
    logger.info("Fee report: %d of %d rows priced", len(fees), len(products))

    return fees, report
