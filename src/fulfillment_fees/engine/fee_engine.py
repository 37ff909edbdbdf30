"""
Fee Engine - resolves the complete fulfillment fee schedule for a product.

Runs every fee calculator for one product configuration and assembles a
FeeBreakdown with:
- The resolved size tier and billable weight
- One field per fee category
- Total monthly recurring fees (storage + aged inventory surcharge)
- Execution trace for every resolution step
- Warnings for approximations and extrapolated brackets
"""
import logging
from typing import Optional

from ..config.settings import get_settings, Settings
from .fees import (
    aged_inventory_fee,
    disposal_fee,
    inbound_placement_fee,
    monthly_storage_fee,
    removal_fee,
    returns_processing_fee,
)
from .models import (
    Category,
    CommercialContext,
    FeeBreakdown,
    PhysicalSpec,
    PlacementMode,
    StorageSeason,
)
from .rate_tables import find_bracket
from .schedule import LOW_PRICE_THRESHOLD
from .shipping import is_premium_priced, select_shipping_table, shipping_fee_for_weight
from .tiers import billable_weight, classify_tier, dimensional_weight
from .units import cm_to_inch, kg_to_lb

logger = logging.getLogger(__name__)


def whole_days(value) -> int:
    """Coerce an inventory age to int days; fractional ages are rejected, not truncated."""
    days = float(value)
    if not days.is_integer():
        raise ValueError(f"Inventory age must be a whole number of days, got {value}")
    return int(days)


class FeeEngine:
    """
    Core fee engine that resolves every fee for one product configuration.

    Resolution order:
    1. Classify size tier from dimensions and unit weight
    2. Resolve billable weight (unit vs dimensional)
    3. Shipping fee: price band → category table or oversize formula → premium surcharge
    4. Inbound placement fee for the placement mode
    5. Monthly storage fee and aged inventory surcharge
    6. Removal, disposal and returns processing fees
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def resolve_context(self, context: Optional[CommercialContext] = None) -> CommercialContext:
        """Return the caller's context with enum fields coerced, or the configured default."""
        if context is None:
            return self.settings.default_context()
        return CommercialContext(
            category=Category(context.category),
            price=float(context.price),
            inventory_age_days=whole_days(context.inventory_age_days),
            placement_mode=PlacementMode(context.placement_mode),
            storage_season=StorageSeason(context.storage_season),
        )

    def calculate(self, spec: PhysicalSpec, context: Optional[CommercialContext] = None) -> FeeBreakdown:
        """
        Calculate every fee with full traceability.

        Args:
            spec: Package dimensions (cm) and unit weight (kg)
            context: Commercial inputs; defaults from settings when omitted

        Returns:
            FeeBreakdown with fees, totals, trace and warnings
        """
        ctx = self.resolve_context(context)

        tier = classify_tier(spec)
        weight_lb = billable_weight(spec, tier)
        length_in = cm_to_inch(spec.length)
        width_in = cm_to_inch(spec.width)
        height_in = cm_to_inch(spec.height)

        shipping = shipping_fee_for_weight(weight_lb, tier, ctx.category, ctx.price)
        placement = inbound_placement_fee(tier, weight_lb, ctx.placement_mode)
        storage = monthly_storage_fee(tier, length_in, width_in, height_in, ctx.storage_season)
        aged = aged_inventory_fee(
            tier, length_in, width_in, height_in, ctx.inventory_age_days, ctx.category
        )
        removal = removal_fee(tier, weight_lb)
        disposal = disposal_fee(tier, weight_lb)
        returns = returns_processing_fee(tier, weight_lb, ctx.category)

        result = FeeBreakdown(
            tier=tier,
            billable_weight=weight_lb,
            shipping_fee=shipping,
            inbound_placement_fee=placement,
            monthly_storage_fee=storage,
            aged_inventory_fee=aged,
            removal_fee=removal,
            disposal_fee=disposal,
            returns_processing_fee=returns,
            total_monthly_recurring_fee=round(storage + aged, 2),
        )

        result.add_trace("Schedule", "Fee schedule", self.settings.schedule_name)
        result.add_trace(
            "Dimensions",
            f"{length_in:.2f} x {width_in:.2f} x {height_in:.2f} in, unit weight",
            f"{kg_to_lb(spec.weight):.3f} lb",
        )
        result.add_trace("Tier", "Classified size tier", tier.value)
        result.add_trace(
            "Billable Weight",
            f"Dimensional weight {dimensional_weight(spec):.3f} lb",
            f"{weight_lb:.3f} lb",
        )
        self._trace_shipping(result, weight_lb, ctx)
        result.add_trace("Placement", f"Inbound placement ({ctx.placement_mode.value})", f"${placement:.2f}")
        result.add_trace("Storage", f"Monthly storage ({ctx.storage_season.value})", f"${storage:.2f}")
        result.add_trace(
            "Aged Inventory",
            f"Surcharge at {ctx.inventory_age_days} days ({ctx.category.value})",
            f"${aged:.2f}",
        )
        result.add_trace("Removal", "Removal / disposal order fee", f"${removal:.2f}")
        result.add_trace("Returns", f"Returns processing ({ctx.category.value})", f"${returns:.2f}")
        result.add_trace("Recurring", "Storage + aged inventory per month", f"${result.total_monthly_recurring_fee:.2f}")

        if ctx.placement_mode is PlacementMode.PARTIAL:
            result.add_warning("Partial placement fee is an approximation of the published rate")

        logger.debug("Fees resolved for %s: tier=%s shipping=%.2f", spec, tier.value, shipping)
        return result

    def _trace_shipping(self, result: FeeBreakdown, weight_lb: float, ctx: CommercialContext):
        tier = result.tier
        table = select_shipping_table(tier, ctx.category, ctx.price)

        if table is None:
            result.add_trace("Shipping Table", "Oversize base + per-lb formula", tier.value)
        elif ctx.price < LOW_PRICE_THRESHOLD:
            result.add_trace("Shipping Table", f"Low-price table (price ${ctx.price:.2f})", tier.value)
        else:
            result.add_trace("Shipping Table", f"Standard {ctx.category.value} table", tier.value)

        if table is not None and find_bracket(weight_lb, table) is None:
            result.add_warning(
                f"Billable weight {weight_lb:.2f} lb is beyond the published brackets; fee extrapolated"
            )

        if is_premium_priced(tier, ctx.price):
            result.add_trace("Premium Surcharge", f"Price ${ctx.price:.2f} above premium threshold", None)

        result.add_trace("Shipping", "Shipping fee", f"${result.shipping_fee:.2f}")


def calculate_all_fees(spec: PhysicalSpec, context: Optional[CommercialContext] = None) -> FeeBreakdown:
    """Calculate the full fee breakdown using the default engine settings."""
    return FeeEngine().calculate(spec, context)
