"""
Shipping (fulfillment) fee calculation.

Standard-size units are priced from bracket tables chosen by price band
and category; oversize units use closed-form base plus per-lb bands.
"""
from typing import Optional

from .models import Category, PhysicalSpec, RateTable, SizeTier
from .rate_tables import lookup_rate, overflow_units
from .schedule import (
    LOW_PRICE_SHIPPING_TABLES,
    LOW_PRICE_THRESHOLD,
    OVERSIZE_SHIPPING_BANDS,
    PREMIUM_PRICE_THRESHOLD,
    PREMIUM_SURCHARGE,
    SHIPPING_TABLES,
)
from .tiers import billable_weight, classify_tier
from .units import CONVERSION_TOLERANCE


def select_shipping_table(tier: SizeTier, category: Category, price: float) -> Optional[RateTable]:
    """
    Pick the bracket table for a standard-size unit.

    Returns None for oversize tiers, which are priced by formula instead.
    """
    if tier.is_oversize:
        return None
    if price < LOW_PRICE_THRESHOLD:
        return LOW_PRICE_SHIPPING_TABLES[tier]
    return SHIPPING_TABLES[(Category(category), tier)]


def oversize_shipping_fee(weight_lb: float, tier: SizeTier) -> float:
    """Base fee plus a per-lb charge for each whole lb above the band's base weight."""
    bands = OVERSIZE_SHIPPING_BANDS[tier]
    for band in bands:
        if weight_lb <= band.max_weight + CONVERSION_TOLERANCE:
            break
    return band.base_fee + overflow_units(weight_lb, band.base_weight) * band.per_lb


def is_premium_priced(tier: SizeTier, price: float) -> bool:
    return tier.is_standard and price > PREMIUM_PRICE_THRESHOLD


def shipping_fee_for_weight(
    weight_lb: float,
    tier: SizeTier,
    category: Category = Category.STANDARD,
    price: float = 20.0,
) -> float:
    """Shipping fee for an already-classified unit at the given billable weight."""
    tier = SizeTier(tier)
    table = select_shipping_table(tier, category, price)
    if table is None:
        fee = oversize_shipping_fee(weight_lb, tier)
    else:
        fee = lookup_rate(weight_lb, table)

    if is_premium_priced(tier, price):
        fee += PREMIUM_SURCHARGE

    return round(fee, 2)


def calculate_shipping_fee(
    spec: PhysicalSpec,
    category: Category = Category.STANDARD,
    price: float = 20.0,
) -> float:
    """
    Calculate the per-unit shipping fee for a product.

    Args:
        spec: Package dimensions (cm) and unit weight (kg)
        category: Product category; apparel has its own standard-size tables
        price: Sale price in USD, selects the low-price band and premium surcharge

    Returns:
        Fee in USD rounded to cents
    """
    tier = classify_tier(spec)
    weight_lb = billable_weight(spec, tier)
    return shipping_fee_for_weight(weight_lb, tier, Category(category), price)
