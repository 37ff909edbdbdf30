"""
Data models for the fee engine.

Uses dataclasses for structured, type-safe data representation and
str-valued enums for the closed sets (tier, category, placement, season).
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional


class _ChoiceEnum(str, Enum):
    """String enum that also accepts loosely formatted values ("Non-Peak")."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower().replace('-', '_').replace(' ', '_')
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]


class SizeTier(_ChoiceEnum):
    """Product size tier, ordered smallest to largest."""
    SMALL_STANDARD = "small_standard"
    LARGE_STANDARD = "large_standard"
    LARGE_BULKY = "large_bulky"
    EXTRA_LARGE = "extra_large"

    @property
    def rank(self) -> int:
        return list(SizeTier).index(self)

    @property
    def is_standard(self) -> bool:
        return self in (SizeTier.SMALL_STANDARD, SizeTier.LARGE_STANDARD)

    @property
    def is_oversize(self) -> bool:
        return not self.is_standard

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS = MappingProxyType({
    SizeTier.SMALL_STANDARD: "Small standard",
    SizeTier.LARGE_STANDARD: "Large standard",
    SizeTier.LARGE_BULKY: "Large bulky",
    SizeTier.EXTRA_LARGE: "Extra large",
})


class Category(_ChoiceEnum):
    STANDARD = "standard"
    APPAREL = "apparel"


class PlacementMode(_ChoiceEnum):
    """Inbound placement service option chosen when creating a shipment."""
    MINIMAL = "minimal"      # one destination, seller pays the full placement fee
    PARTIAL = "partial"      # a few destinations, reduced fee
    OPTIMIZED = "optimized"  # marketplace-chosen split, no fee


class StorageSeason(_ChoiceEnum):
    PEAK = "peak"            # October - December
    NON_PEAK = "non_peak"    # January - September


@dataclass(frozen=True)
class PhysicalSpec:
    """Package dimensions in centimetres and unit weight in kilograms."""
    length: float
    width: float
    height: float
    weight: float


@dataclass(frozen=True)
class CommercialContext:
    """Commercial inputs for a fee calculation; every field has a default."""
    category: Category = Category.STANDARD
    price: float = 20.0
    inventory_age_days: int = 0
    placement_mode: PlacementMode = PlacementMode.OPTIMIZED
    storage_season: StorageSeason = StorageSeason.NON_PEAK


@dataclass(frozen=True)
class RateBracket:
    """
    One row of a rate table.

    `threshold` is the inclusive upper bound of the bracket. Only the final
    bracket of a table may carry overflow parameters, which price values
    beyond every listed threshold.
    """
    threshold: float
    fee: float
    overflow_rate: Optional[float] = None
    overflow_base: Optional[float] = None

    @property
    def has_overflow(self) -> bool:
        return self.overflow_rate is not None and self.overflow_base is not None


RateTable = tuple[RateBracket, ...]


@dataclass
class TraceStep:
    """A single step in the fee resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class FeeBreakdown:
    """Complete result of a fee calculation for one product configuration."""
    tier: SizeTier
    billable_weight: float  # lb
    shipping_fee: float
    inbound_placement_fee: float
    monthly_storage_fee: float
    aged_inventory_fee: float
    removal_fee: float
    disposal_fee: float
    returns_processing_fee: float
    total_monthly_recurring_fee: float
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def total_per_unit_fees(self) -> float:
        """One-time fulfillment cost per unit sold: shipping plus placement."""
        return round(self.shipping_fee + self.inbound_placement_fee, 2)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this breakdown."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a warning for this breakdown."""
        if warning not in self.warnings:
            self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Flat dict of the tier and every fee, suitable for a DataFrame row."""
        return {
            "tier": self.tier.value,
            "billable_weight": round(self.billable_weight, 4),
            "shipping_fee": self.shipping_fee,
            "inbound_placement_fee": self.inbound_placement_fee,
            "monthly_storage_fee": self.monthly_storage_fee,
            "aged_inventory_fee": self.aged_inventory_fee,
            "removal_fee": self.removal_fee,
            "disposal_fee": self.disposal_fee,
            "returns_processing_fee": self.returns_processing_fee,
            "total_monthly_recurring_fee": self.total_monthly_recurring_fee,
            "total_per_unit_fees": self.total_per_unit_fees,
        }
