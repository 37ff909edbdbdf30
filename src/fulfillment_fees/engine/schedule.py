"""
Static fee schedule (US marketplace, 2026 rates).

All weights are in lb, dimensions in inches, volumes in cubic feet and
fees in USD. Tables are built once at import and never mutated.
"""
import math
from dataclasses import dataclass
from types import MappingProxyType

from .models import Category, RateBracket, RateTable, SizeTier, StorageSeason

SCHEDULE_NAME = "US 2026"


def _table(rows, overflow_rate: float = None, overflow_base: float = None) -> RateTable:
    brackets = [RateBracket(threshold=t, fee=f) for t, f in rows]
    if overflow_rate is not None:
        last = brackets[-1]
        brackets[-1] = RateBracket(last.threshold, last.fee, overflow_rate, overflow_base)
    return tuple(brackets)


# ============ Shipping (fulfillment) fee ============

LOW_PRICE_THRESHOLD = 10.00
PREMIUM_PRICE_THRESHOLD = 50.00
PREMIUM_SURCHARGE = 0.26

_SMALL_STANDARD_WEIGHTS = (0.125, 0.25, 0.375, 0.5, 0.625, 0.75, 0.875, 1.0)
_LARGE_STANDARD_WEIGHTS = (0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0, 2.25, 2.5, 2.75, 3.0)

SHIPPING_TABLES = MappingProxyType({
    (Category.STANDARD, SizeTier.SMALL_STANDARD): _table(zip(
        _SMALL_STANDARD_WEIGHTS,
        (3.06, 3.15, 3.24, 3.33, 3.43, 3.53, 3.60, 3.65),
    )),
    (Category.APPAREL, SizeTier.SMALL_STANDARD): _table(zip(
        _SMALL_STANDARD_WEIGHTS,
        (3.27, 3.43, 3.50, 3.58, 3.73, 3.87, 4.01, 4.15),
    )),
    (Category.STANDARD, SizeTier.LARGE_STANDARD): _table(zip(
        _LARGE_STANDARD_WEIGHTS,
        (3.68, 3.90, 4.15, 4.55, 4.99, 5.37, 5.52, 5.77, 5.94, 6.11, 6.28, 6.45),
    ), overflow_rate=0.32, overflow_base=3.0),
    (Category.APPAREL, SizeTier.LARGE_STANDARD): _table(zip(
        _LARGE_STANDARD_WEIGHTS,
        (4.28, 4.42, 4.56, 5.06, 5.54, 5.96, 6.12, 6.38, 6.56, 6.74, 6.92, 7.10),
    ), overflow_rate=0.40, overflow_base=3.0),
})

# Units priced under LOW_PRICE_THRESHOLD, any category
LOW_PRICE_SHIPPING_TABLES = MappingProxyType({
    SizeTier.SMALL_STANDARD: _table(zip(
        _SMALL_STANDARD_WEIGHTS,
        (2.29, 2.38, 2.47, 2.56, 2.66, 2.76, 2.83, 2.88),
    )),
    SizeTier.LARGE_STANDARD: _table(zip(
        _LARGE_STANDARD_WEIGHTS,
        (2.91, 3.13, 3.38, 3.78, 4.22, 4.60, 4.75, 5.00, 5.10, 5.28, 5.44, 5.85),
    ), overflow_rate=0.32, overflow_base=3.0),
})


@dataclass(frozen=True)
class OversizeBand:
    """Closed-form band: base_fee + per_lb for each whole lb above base_weight."""
    max_weight: float
    base_fee: float
    base_weight: float
    per_lb: float


OVERSIZE_SHIPPING_BANDS = MappingProxyType({
    SizeTier.LARGE_BULKY: (
        OversizeBand(max_weight=math.inf, base_fee=9.61, base_weight=1.0, per_lb=0.38),
    ),
    SizeTier.EXTRA_LARGE: (
        OversizeBand(max_weight=50.0, base_fee=26.33, base_weight=1.0, per_lb=0.38),
        OversizeBand(max_weight=70.0, base_fee=45.00, base_weight=50.0, per_lb=0.75),
        OversizeBand(max_weight=150.0, base_fee=60.00, base_weight=70.0, per_lb=0.75),
        OversizeBand(max_weight=math.inf, base_fee=120.00, base_weight=150.0, per_lb=0.19),
    ),
})


# ============ Inbound placement fee ============

# (max billable weight, fee) per tier for the minimal-split option
MINIMAL_PLACEMENT_BANDS = MappingProxyType({
    SizeTier.SMALL_STANDARD: ((0.25, 0.21), (0.5, 0.23), (0.75, 0.25), (math.inf, 0.27)),
    SizeTier.LARGE_STANDARD: ((0.75, 0.30), (1.5, 0.34), (3.0, 0.41), (math.inf, 0.58)),
    SizeTier.LARGE_BULKY: ((5.0, 2.16), (12.0, 2.53), (28.0, 2.96), (math.inf, 3.78)),
    SizeTier.EXTRA_LARGE: ((50.0, 5.00), (math.inf, 7.50)),
})

# Partial split is approximated as a share of the minimal-split fee
PARTIAL_PLACEMENT_FACTOR = 0.5


# ============ Monthly storage fee (per cubic foot) ============

PEAK_MONTHS = frozenset({10, 11, 12})

STANDARD_STORAGE_RATES = MappingProxyType({
    StorageSeason.NON_PEAK: 0.78,
    StorageSeason.PEAK: 2.40,
})

OVERSIZE_STORAGE_RATES = MappingProxyType({
    StorageSeason.NON_PEAK: 0.56,
    StorageSeason.PEAK: 1.40,
})


# ============ Aged inventory surcharge ============

AGED_INVENTORY_MIN_AGE = 181
APPAREL_EXEMPT_BELOW_AGE = 271
LONG_TERM_AGE = 366
LONG_TERM_HIGH_AGE = 456

# Upper day bound of each bracket -> rate per cubic foot
AGED_INVENTORY_RATES = _table((
    (210, 0.50),
    (240, 1.00),
    (270, 1.50),
    (300, 5.45),
    (330, 5.70),
    (365, 5.90),
    (455, 6.90),
    (456, 7.90),
))

LONG_TERM_MIN_FEE_PER_UNIT = 0.15
LONG_TERM_HIGH_MIN_FEE_PER_UNIT = 0.30


# ============ Removal / disposal fee ============

REMOVAL_TABLE = _table((
    (0.5, 1.04),
    (1.0, 1.53),
    (2.0, 2.27),
), overflow_rate=1.06, overflow_base=2.0)


# ============ Returns processing fee (apparel) ============

APPAREL_RETURNS_TABLES = MappingProxyType({
    SizeTier.SMALL_STANDARD: _table((
        (0.25, 1.65),
        (0.5, 1.72),
        (0.75, 1.79),
        (1.0, 1.86),
    )),
    SizeTier.LARGE_STANDARD: _table((
        (0.25, 1.98),
        (0.5, 2.05),
        (0.75, 2.12),
        (1.0, 2.30),
        (1.5, 2.45),
        (2.0, 2.61),
        (3.0, 2.99),
    ), overflow_rate=0.16, overflow_base=3.0),
})


def all_rate_tables() -> dict[str, RateTable]:
    """Every bracketed table in the schedule, keyed by a readable name."""
    tables = {}
    for (category, tier), table in SHIPPING_TABLES.items():
        tables[f"shipping/{category.value}/{tier.value}"] = table
    for tier, table in LOW_PRICE_SHIPPING_TABLES.items():
        tables[f"shipping/low_price/{tier.value}"] = table
    for tier, table in APPAREL_RETURNS_TABLES.items():
        tables[f"returns/apparel/{tier.value}"] = table
    tables["aged_inventory"] = AGED_INVENTORY_RATES
    tables["removal"] = REMOVAL_TABLE
    return tables
