"""
Unit conversions between the metric inputs and the imperial fee schedule.

Values pass through unchanged in sign; domain checks happen at the boundary.
"""

CM_PER_INCH = 2.54
LB_PER_KG = 2.20462
CUBIC_INCHES_PER_CUBIC_FOOT = 1728

# Absorbs float noise from cm -> in and kg -> lb conversion at exact
# tier and bracket boundaries
CONVERSION_TOLERANCE = 1e-9


def cm_to_inch(cm: float) -> float:
    return cm / CM_PER_INCH


def inch_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def kg_to_lb(kg: float) -> float:
    return kg * LB_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb / LB_PER_KG


# Names used by callers that think in "imperial/metric" rather than units
to_imperial_length = cm_to_inch
to_metric_length = inch_to_cm
to_imperial_mass = kg_to_lb
to_metric_mass = lb_to_kg


def cubic_feet(length_in: float, width_in: float, height_in: float) -> float:
    """Volume in cubic feet from dimensions in inches."""
    return (length_in * width_in * height_in) / CUBIC_INCHES_PER_CUBIC_FOOT
