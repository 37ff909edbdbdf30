"""
Per-category fee calculators: placement, storage, aged inventory,
removal/disposal and returns processing.

Each function is total over its inputs; combinations the schedule does
not price resolve to 0.0 explicitly.
"""
from datetime import date

from .models import Category, PlacementMode, SizeTier, StorageSeason
from .rate_tables import lookup_rate
from .schedule import (
    AGED_INVENTORY_MIN_AGE,
    AGED_INVENTORY_RATES,
    APPAREL_EXEMPT_BELOW_AGE,
    APPAREL_RETURNS_TABLES,
    LONG_TERM_AGE,
    LONG_TERM_HIGH_AGE,
    LONG_TERM_HIGH_MIN_FEE_PER_UNIT,
    LONG_TERM_MIN_FEE_PER_UNIT,
    MINIMAL_PLACEMENT_BANDS,
    OVERSIZE_STORAGE_RATES,
    PARTIAL_PLACEMENT_FACTOR,
    PEAK_MONTHS,
    REMOVAL_TABLE,
    STANDARD_STORAGE_RATES,
)
from .units import CONVERSION_TOLERANCE, cubic_feet


# ============ Inbound placement ============

def _minimal_placement_fee(tier: SizeTier, weight_lb: float) -> float:
    bands = MINIMAL_PLACEMENT_BANDS[tier]
    for max_weight, fee in bands:
        if weight_lb <= max_weight + CONVERSION_TOLERANCE:
            return fee
    return bands[-1][1]


def inbound_placement_fee(tier: SizeTier, weight_lb: float, mode: PlacementMode) -> float:
    """
    Per-unit inbound placement fee for the chosen split option.

    Partial split is an approximation (a fixed share of the minimal-split
    fee) until a published partial-split table is wired in.
    """
    mode = PlacementMode(mode)
    if mode is PlacementMode.OPTIMIZED:
        return 0.0

    fee = _minimal_placement_fee(SizeTier(tier), weight_lb)
    if mode is PlacementMode.PARTIAL:
        fee *= PARTIAL_PLACEMENT_FACTOR
    return round(fee, 2)


# ============ Monthly storage ============

def season_for_month(month: int) -> StorageSeason:
    """Peak season runs October through December."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return StorageSeason.PEAK if month in PEAK_MONTHS else StorageSeason.NON_PEAK


def season_for_date(d: date) -> StorageSeason:
    return season_for_month(d.month)


def storage_rate(tier: SizeTier, season: StorageSeason) -> float:
    """Rate per cubic foot per month."""
    season = StorageSeason(season)
    rates = OVERSIZE_STORAGE_RATES if SizeTier(tier).is_oversize else STANDARD_STORAGE_RATES
    return rates[season]


def monthly_storage_fee(
    tier: SizeTier,
    length_in: float,
    width_in: float,
    height_in: float,
    season: StorageSeason = StorageSeason.NON_PEAK,
) -> float:
    volume = cubic_feet(length_in, width_in, height_in)
    return round(volume * storage_rate(tier, season), 2)


# ============ Aged inventory surcharge ============

def aged_inventory_fee(
    tier: SizeTier,
    length_in: float,
    width_in: float,
    height_in: float,
    age_days: int,
    category: Category = Category.STANDARD,
) -> float:
    """
    Monthly surcharge for units stored 181 days or longer.

    Apparel is exempt below 271 days. From 366 days the surcharge is the
    greater of the volume charge and a per-unit minimum.
    """
    if age_days < AGED_INVENTORY_MIN_AGE:
        return 0.0
    if Category(category) is Category.APPAREL and age_days < APPAREL_EXEMPT_BELOW_AGE:
        return 0.0

    volume = cubic_feet(length_in, width_in, height_in)
    fee = volume * lookup_rate(age_days, AGED_INVENTORY_RATES)

    if age_days >= LONG_TERM_AGE:
        if age_days >= LONG_TERM_HIGH_AGE:
            minimum = LONG_TERM_HIGH_MIN_FEE_PER_UNIT
        else:
            minimum = LONG_TERM_MIN_FEE_PER_UNIT
        fee = max(fee, minimum)

    return round(fee, 2)


# ============ Removal / disposal ============

def removal_disposal_fee(tier: SizeTier, weight_lb: float) -> float:
    """Per-unit removal or disposal order fee; weight-banded, not tier-differentiated."""
    return round(lookup_rate(weight_lb, REMOVAL_TABLE), 2)


def removal_fee(tier: SizeTier, weight_lb: float) -> float:
    return removal_disposal_fee(tier, weight_lb)


def disposal_fee(tier: SizeTier, weight_lb: float) -> float:
    # Disposal is billed on the removal schedule
    return removal_disposal_fee(tier, weight_lb)


# ============ Returns processing ============

def returns_processing_fee(
    tier: SizeTier,
    weight_lb: float,
    category: Category = Category.STANDARD,
) -> float:
    """
    Per-return processing fee.

    Only apparel in the standard-size tiers is charged; the high-return-rate
    policy for other categories is not modeled.
    """
    if Category(category) is not Category.APPAREL:
        return 0.0
    table = APPAREL_RETURNS_TABLES.get(SizeTier(tier))
    if table is None:
        return 0.0
    return round(lookup_rate(weight_lb, table), 2)
