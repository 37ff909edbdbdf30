"""
Rate Table Lookup - the "first bracket that fits, else extrapolate" primitive.

Every weight- or age-keyed fee resolves through `lookup_rate` so that
bracket boundaries behave identically across all schedules.
"""
import math
from typing import Optional

from .models import RateBracket, RateTable
from .units import CONVERSION_TOLERANCE


def find_bracket(value: float, table: RateTable) -> Optional[RateBracket]:
    """Return the first bracket whose threshold is >= value, or None if value is beyond them all."""
    for bracket in table:
        if value <= bracket.threshold + CONVERSION_TOLERANCE:
            return bracket
    return None


def overflow_units(value: float, base: float) -> int:
    """Whole units above `base`, rounded up; 0 when value is not above base."""
    excess = round(value - base, 9)
    if excess <= 0:
        return 0
    return math.ceil(excess)


def lookup_rate(value: float, table: RateTable) -> float:
    """
    Resolve the fee for `value` against an ascending rate table.

    Values beyond the last threshold are priced by the last bracket: its
    overflow formula when it carries one, otherwise its flat fee as a cap.
    """
    if not table:
        raise ValueError("Rate table is empty")

    bracket = find_bracket(value, table)
    if bracket is not None:
        return bracket.fee

    last = table[-1]
    if last.has_overflow:
        return last.fee + overflow_units(value, last.overflow_base) * last.overflow_rate
    return last.fee


def validate_table(table: RateTable) -> list[str]:
    """
    Check the structural invariants of a rate table.

    Returns a list of problems; an empty list means the table is valid.
    """
    errors = []
    if not table:
        return ["Rate table is empty"]

    for i, (prev, curr) in enumerate(zip(table, table[1:]), start=1):
        if curr.threshold <= prev.threshold:
            errors.append(f"Bracket {i} threshold {curr.threshold} is not above {prev.threshold}")
        if curr.fee < prev.fee:
            errors.append(f"Bracket {i} fee {curr.fee} is below previous fee {prev.fee}")

    for i, bracket in enumerate(table[:-1]):
        if bracket.overflow_rate is not None or bracket.overflow_base is not None:
            errors.append(f"Bracket {i} carries overflow parameters but is not the last bracket")

    last = table[-1]
    if (last.overflow_rate is None) != (last.overflow_base is None):
        errors.append("Last bracket must set both overflow_rate and overflow_base, or neither")
    if last.overflow_rate is not None and last.overflow_rate < 0:
        errors.append("Overflow rate must not be negative")

    return errors
