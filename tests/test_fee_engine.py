import logging

import pytest

from fulfillment_fees.config.settings import Settings, get_settings
from fulfillment_fees.engine import (
    Category,
    CommercialContext,
    FeeEngine,
    PhysicalSpec,
    PlacementMode,
    SizeTier,
    StorageSeason,
    calculate_all_fees,
)

TSHIRT = PhysicalSpec(length=35, width=25, height=2, weight=0.25)
CARTON = PhysicalSpec(length=45, width=35, height=20, weight=2.0)


@pytest.fixture
def engine():
    return FeeEngine()


def test_defaults_applied_when_context_omitted(engine):
    result = engine.calculate(TSHIRT)
    assert result.tier == SizeTier.LARGE_STANDARD
    assert result.shipping_fee == 4.15
    assert result.inbound_placement_fee == 0.0
    assert result.monthly_storage_fee == 0.05
    assert result.aged_inventory_fee == 0.0
    assert result.total_monthly_recurring_fee == 0.05
    assert result.returns_processing_fee == 0.0
    assert result.warnings == []


def test_tshirt_apparel_breakdown(engine):
    context = CommercialContext(
        category=Category.APPAREL,
        price=29.99,
        placement_mode=PlacementMode.MINIMAL,
        storage_season=StorageSeason.PEAK,
    )
    result = engine.calculate(TSHIRT, context)
    assert result.shipping_fee == 4.56
    assert result.inbound_placement_fee == 0.30
    assert result.monthly_storage_fee == 0.15
    assert result.returns_processing_fee == 2.12
    assert result.total_per_unit_fees == 4.86


def test_calculate_all_fees_matches_engine(engine):
    context = CommercialContext(category=Category.APPAREL, price=29.99)
    assert calculate_all_fees(TSHIRT, context).to_dict() == engine.calculate(TSHIRT, context).to_dict()


def test_string_context_fields_are_coerced(engine):
    context = CommercialContext(
        category="Apparel",
        price="29.99",
        inventory_age_days="0",
        placement_mode="minimal",
        storage_season="Peak",
    )
    result = engine.calculate(TSHIRT, context)
    assert result.shipping_fee == 4.56
    assert result.inbound_placement_fee == 0.30


def test_whole_float_age_is_accepted(engine):
    context = CommercialContext(category=Category.APPAREL, inventory_age_days=271.0)
    assert engine.calculate(TSHIRT, context).aged_inventory_fee > 0


@pytest.mark.parametrize("age", [270.9, "270.5"])
def test_fractional_age_is_rejected(engine, age):
    with pytest.raises(ValueError, match="whole number of days"):
        engine.calculate(TSHIRT, CommercialContext(category=Category.APPAREL, inventory_age_days=age))


def test_unknown_context_value_raises(engine):
    with pytest.raises(ValueError):
        engine.calculate(TSHIRT, CommercialContext(category="furniture"))


def test_trace_covers_every_fee(engine):
    result = engine.calculate(TSHIRT)
    steps = [t.step for t in result.trace]
    for step in ("Schedule", "Tier", "Billable Weight", "Shipping", "Placement",
                 "Storage", "Aged Inventory", "Removal", "Returns", "Recurring"):
        assert step in steps

    text = result.get_trace_text()
    assert "→ Tier: Classified size tier = large_standard" in text
    assert "US 2026" in text


def test_premium_surcharge_traced(engine):
    result = engine.calculate(TSHIRT, CommercialContext(price=80.0))
    assert result.shipping_fee == 4.41
    assert "Premium Surcharge" in [t.step for t in result.trace]


def test_low_price_table_traced(engine):
    result = engine.calculate(TSHIRT, CommercialContext(price=9.0))
    assert result.shipping_fee == 3.38
    assert "Low-price table" in result.get_trace_text()


def test_partial_placement_warns(engine):
    result = engine.calculate(TSHIRT, CommercialContext(placement_mode=PlacementMode.PARTIAL))
    assert result.inbound_placement_fee == 0.15
    assert any("approximation" in w for w in result.warnings)


def test_extrapolated_bracket_warns(engine):
    result = engine.calculate(CARTON)
    assert result.shipping_fee == 9.97
    assert len(result.warnings) == 1
    assert "extrapolated" in result.warnings[0]


def test_oversize_does_not_warn(engine):
    result = engine.calculate(PhysicalSpec(length=100, width=40, height=30, weight=10))
    assert result.tier == SizeTier.LARGE_BULKY
    assert result.warnings == []


def test_recurring_is_storage_plus_aged(engine):
    context = CommercialContext(inventory_age_days=200)
    result = engine.calculate(CARTON, context)
    assert result.aged_inventory_fee == 0.56
    assert result.total_monthly_recurring_fee == pytest.approx(
        result.monthly_storage_fee + result.aged_inventory_fee
    )


def test_zero_dimensions_still_priced(engine):
    result = engine.calculate(PhysicalSpec(length=0, width=0, height=0, weight=0))
    assert result.tier == SizeTier.SMALL_STANDARD
    assert result.shipping_fee == 3.06
    assert result.monthly_storage_fee == 0.0


def test_to_dict(engine):
    row = engine.calculate(TSHIRT).to_dict()
    assert row["tier"] == "large_standard"
    assert row["total_per_unit_fees"] == 4.15
    assert row["billable_weight"] == pytest.approx(0.5512, abs=1e-4)
    assert set(row) >= {"shipping_fee", "disposal_fee", "total_monthly_recurring_fee"}


def test_add_warning_deduplicates(engine):
    result = engine.calculate(TSHIRT)
    result.add_warning("check")
    result.add_warning("check")
    assert result.warnings == ["check"]


def test_calculation_logs_at_debug(engine, caplog):
    with caplog.at_level(logging.DEBUG, logger="fulfillment_fees.engine.fee_engine"):
        engine.calculate(TSHIRT)
    assert "large_standard" in caplog.text


def test_settings_paths(tmp_path):
    settings = Settings.load(tmp_path)
    assert settings.golden_cases == tmp_path / "tests" / "golden_cases.csv"
    assert settings.report_output == tmp_path / "outputs" / "fee_report.csv"
    assert settings.schedule_name == "US 2026"


def test_settings_default_context_drives_engine(tmp_path):
    settings = Settings.load(tmp_path)
    settings.default_category = "apparel"
    settings.default_price = 29.99
    context = settings.default_context()
    assert context.category == Category.APPAREL
    assert FeeEngine(settings).calculate(TSHIRT).shipping_fee == 4.56


def test_global_settings_is_cached():
    assert get_settings() is get_settings()
