import pytest
from hypothesis import given
from hypothesis import strategies as st

from fulfillment_fees.engine import Category, PhysicalSpec, SizeTier, billable_weight
from fulfillment_fees.engine.schedule import LOW_PRICE_SHIPPING_TABLES, SHIPPING_TABLES
from fulfillment_fees.engine.shipping import (
    calculate_shipping_fee,
    is_premium_priced,
    oversize_shipping_fee,
    select_shipping_table,
    shipping_fee_for_weight,
)
from fulfillment_fees.engine.units import inch_to_cm, lb_to_kg

TSHIRT = PhysicalSpec(length=35, width=25, height=2, weight=0.25)
PHONE_CASE = PhysicalSpec(length=15, width=8, height=1.5, weight=0.05)
CARTON = PhysicalSpec(length=45, width=35, height=20, weight=2.0)
BULKY = PhysicalSpec(length=100, width=40, height=30, weight=10)


def test_tshirt_apparel():
    assert calculate_shipping_fee(TSHIRT, Category.APPAREL, 29.99) == 4.56


def test_tshirt_standard_category():
    assert calculate_shipping_fee(TSHIRT, Category.STANDARD, 29.99) == 4.15


def test_category_accepts_plain_string():
    assert calculate_shipping_fee(TSHIRT, "apparel", 29.99) == 4.56


@pytest.mark.parametrize("price, expected", [
    (8.99, 2.29),
    (9.99, 2.29),
    (10.00, 3.06),   # threshold itself is not low-price
    (50.00, 3.06),   # threshold itself is not premium
    (50.01, 3.32),
])
def test_phone_case_price_bands(price, expected):
    assert calculate_shipping_fee(PHONE_CASE, Category.STANDARD, price) == expected


@pytest.mark.parametrize("tier", [SizeTier.SMALL_STANDARD, SizeTier.LARGE_STANDARD])
@pytest.mark.parametrize("category", list(Category))
def test_low_price_and_standard_tables_are_disjoint(tier, category):
    low = select_shipping_table(tier, category, 9.99)
    regular = select_shipping_table(tier, category, 10.00)
    assert low is LOW_PRICE_SHIPPING_TABLES[tier]
    assert regular is SHIPPING_TABLES[(category, tier)]
    assert low is not regular


@pytest.mark.parametrize("tier", [SizeTier.LARGE_BULKY, SizeTier.EXTRA_LARGE])
def test_oversize_has_no_bracket_table(tier):
    assert select_shipping_table(tier, Category.STANDARD, 20.0) is None


def test_premium_surcharge_only_for_standard_size():
    assert is_premium_priced(SizeTier.SMALL_STANDARD, 60.0)
    assert not is_premium_priced(SizeTier.LARGE_BULKY, 60.0)
    assert not is_premium_priced(SizeTier.LARGE_STANDARD, 50.0)


def test_bulky_ignores_category_and_price():
    """52.68 lb dimensional: 9.61 + 52 x 0.38."""
    assert calculate_shipping_fee(BULKY, Category.STANDARD, 80) == 29.37
    assert calculate_shipping_fee(BULKY, Category.APPAREL, 80) == 29.37
    assert calculate_shipping_fee(BULKY, Category.STANDARD, 5) == 29.37


@pytest.mark.parametrize("weight, expected", [
    (0.5, 26.33),
    (50.0, 44.95),
    (60.0, 52.50),
    (200.0, 129.50),
])
def test_extra_large_bands(weight, expected):
    assert oversize_shipping_fee(weight, SizeTier.EXTRA_LARGE) == pytest.approx(expected)


def test_carton_extrapolates_beyond_last_bracket():
    """13.83 lb dimensional: 6.45 + 11 x 0.32."""
    assert calculate_shipping_fee(CARTON, Category.STANDARD, 25) == 9.97


def test_dimensional_weight_on_threshold_stays_in_bracket():
    """6.25 x 6.25 x 4.448 in is exactly 1.25 lb dimensional, entered in metric."""
    spec = PhysicalSpec(
        length=inch_to_cm(6.25),
        width=inch_to_cm(6.25),
        height=inch_to_cm(4.448),
        weight=lb_to_kg(1.1),
    )
    assert billable_weight(spec) == pytest.approx(1.25)
    assert calculate_shipping_fee(spec, Category.STANDARD, 20.0) == 4.99


@pytest.mark.parametrize("tier, weight, expected", [
    (SizeTier.LARGE_STANDARD, 3.0 + 2e-16 * 3, 6.45),
    (SizeTier.SMALL_STANDARD, 0.125 + 1e-15, 3.06),
])
def test_conversion_noise_does_not_reach_next_bracket(tier, weight, expected):
    assert shipping_fee_for_weight(weight, tier, Category.STANDARD, 20.0) == expected


def test_fee_for_weight_accepts_tier_string():
    assert shipping_fee_for_weight(0.6, "large_standard", Category.APPAREL, 29.99) == 4.56


@given(
    w1=st.floats(min_value=0, max_value=400, allow_nan=False),
    w2=st.floats(min_value=0, max_value=400, allow_nan=False),
    tier=st.sampled_from(list(SizeTier)),
    category=st.sampled_from(list(Category)),
    price=st.sampled_from([5.0, 25.0, 75.0]),
)
def test_fee_is_monotonic_in_weight(w1, w2, tier, category, price):
    """Within a tier, category and price band a heavier unit never costs less."""
    low, high = sorted((w1, w2))
    assert (
        shipping_fee_for_weight(low, tier, category, price)
        <= shipping_fee_for_weight(high, tier, category, price)
    )
