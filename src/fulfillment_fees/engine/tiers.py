"""
Size tier classification and billable weight.

Tiers are evaluated smallest first; the first envelope a product fits in
wins. Anything that fits no envelope is extra large.
"""
from .models import PhysicalSpec, SizeTier
from .units import CONVERSION_TOLERANCE, cm_to_inch, kg_to_lb

# Envelopes: (max weight lb, max longest in, max median in, max shortest in)
SMALL_STANDARD_ENVELOPE = (1.0, 15.0, 12.0, 0.75)
LARGE_STANDARD_ENVELOPE = (20.0, 18.0, 14.0, 8.0)

LARGE_BULKY_MAX_WEIGHT = 50.0
LARGE_BULKY_MAX_LONGEST = 59.0
LARGE_BULKY_MAX_LENGTH_PLUS_GIRTH = 130.0

DIM_WEIGHT_DIVISOR = 139

# Standard-size units at or under this weight ship on unit weight alone
UNIT_WEIGHT_ONLY_MAX_LB = 1.0


def _fits(value: float, limit: float) -> bool:
    return value <= limit + CONVERSION_TOLERANCE


def sorted_dimensions(spec: PhysicalSpec) -> tuple[float, float, float]:
    """Return (longest, median, shortest) in inches."""
    sides = sorted(
        (cm_to_inch(spec.length), cm_to_inch(spec.width), cm_to_inch(spec.height)),
        reverse=True,
    )
    return sides[0], sides[1], sides[2]


def girth(median: float, shortest: float) -> float:
    return 2 * (median + shortest)


def _fits_envelope(weight_lb: float, sides: tuple[float, float, float], envelope) -> bool:
    max_weight, max_longest, max_median, max_shortest = envelope
    longest, median, shortest = sides
    return (
        _fits(weight_lb, max_weight)
        and _fits(longest, max_longest)
        and _fits(median, max_median)
        and _fits(shortest, max_shortest)
    )


def classify_tier(spec: PhysicalSpec) -> SizeTier:
    """
    Classify a product into its size tier.

    Resolution order:
    1. Small standard envelope
    2. Large standard envelope
    3. Large bulky weight, longest side and length + girth limits
    4. Extra large
    """
    weight_lb = kg_to_lb(spec.weight)
    sides = sorted_dimensions(spec)

    if _fits_envelope(weight_lb, sides, SMALL_STANDARD_ENVELOPE):
        return SizeTier.SMALL_STANDARD

    if _fits_envelope(weight_lb, sides, LARGE_STANDARD_ENVELOPE):
        return SizeTier.LARGE_STANDARD

    longest, median, shortest = sides
    if (
        _fits(weight_lb, LARGE_BULKY_MAX_WEIGHT)
        and _fits(longest, LARGE_BULKY_MAX_LONGEST)
        and _fits(longest + girth(median, shortest), LARGE_BULKY_MAX_LENGTH_PLUS_GIRTH)
    ):
        return SizeTier.LARGE_BULKY

    return SizeTier.EXTRA_LARGE


def dimensional_weight(spec: PhysicalSpec) -> float:
    """Volumetric weight in lb: cubic inches / divisor."""
    length_in = cm_to_inch(spec.length)
    width_in = cm_to_inch(spec.width)
    height_in = cm_to_inch(spec.height)
    return (length_in * width_in * height_in) / DIM_WEIGHT_DIVISOR


def billable_weight(spec: PhysicalSpec, tier: SizeTier = None) -> float:
    """
    Weight in lb used for every weight-keyed fee.

    The greater of unit and dimensional weight, except standard-size units
    weighing 1 lb or less, which are billed on unit weight.
    """
    weight_lb = kg_to_lb(spec.weight)
    tier = SizeTier(tier) if tier else classify_tier(spec)
    if tier.is_standard and _fits(weight_lb, UNIT_WEIGHT_ONLY_MAX_LB):
        return weight_lb
    return max(weight_lb, dimensional_weight(spec))
