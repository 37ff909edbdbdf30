"""Engine subpackage - fee schedule, tier classification and fee resolution."""
from .fee_engine import FeeEngine, calculate_all_fees
from .models import (
    Category,
    CommercialContext,
    FeeBreakdown,
    PhysicalSpec,
    PlacementMode,
    RateBracket,
    SizeTier,
    StorageSeason,
)
from .shipping import calculate_shipping_fee
from .tiers import billable_weight, classify_tier
from .units import to_imperial_length, to_imperial_mass

__all__ = [
    'FeeEngine', 'calculate_all_fees', 'calculate_shipping_fee',
    'classify_tier', 'billable_weight', 'to_imperial_length', 'to_imperial_mass',
    'Category', 'CommercialContext', 'FeeBreakdown', 'PhysicalSpec',
    'PlacementMode', 'RateBracket', 'SizeTier', 'StorageSeason',
]
