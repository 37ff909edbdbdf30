"""
Input validation at the engine boundary.

The fee calculators trust their inputs; callers convert raw data through
these models first so negative measurements or unknown category / mode
strings are rejected before any fee is computed.
"""
import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..engine.models import (
    Category,
    CommercialContext,
    PhysicalSpec,
    PlacementMode,
    StorageSeason,
)


def _parse_choice(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        supported = ", ".join(enum_cls.choices())
        raise ValueError(
            f"{label} '{value}' not supported. "
            f"Available values: {supported}"
        ) from None


def parse_category(value) -> Category:
    return _parse_choice(Category, value, "Category")


def parse_placement_mode(value) -> PlacementMode:
    return _parse_choice(PlacementMode, value, "Placement mode")


def parse_storage_season(value) -> StorageSeason:
    return _parse_choice(StorageSeason, value, "Storage season")


class ProductSpecInput(BaseModel):
    """Request model for package dimensions (cm) and unit weight (kg)."""
    length: float = Field(ge=0)
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    weight: float = Field(ge=0)

    @field_validator('length', 'width', 'height', 'weight')
    @classmethod
    def must_be_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    def to_spec(self) -> PhysicalSpec:
        return PhysicalSpec(
            length=self.length,
            width=self.width,
            height=self.height,
            weight=self.weight,
        )


class FeeContextInput(BaseModel):
    """Request model for the commercial context; omitted fields use engine defaults."""
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    inventory_age_days: Optional[int] = Field(default=None, ge=0)
    placement_mode: Optional[str] = None
    storage_season: Optional[str] = None

    @field_validator('category')
    @classmethod
    def check_category(cls, value):
        return None if value is None else parse_category(value).value

    @field_validator('placement_mode')
    @classmethod
    def check_placement_mode(cls, value):
        return None if value is None else parse_placement_mode(value).value

    @field_validator('storage_season')
    @classmethod
    def check_storage_season(cls, value):
        return None if value is None else parse_storage_season(value).value

    @field_validator('price')
    @classmethod
    def price_must_be_finite(cls, value):
        if value is not None and not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    def to_context(self, defaults: Optional[CommercialContext] = None) -> CommercialContext:
        """Merge provided fields over `defaults` (or the CommercialContext defaults)."""
        base = defaults or CommercialContext()
        return CommercialContext(
            category=parse_category(self.category) if self.category else base.category,
            price=self.price if self.price is not None else base.price,
            inventory_age_days=(
                self.inventory_age_days if self.inventory_age_days is not None
                else base.inventory_age_days
            ),
            placement_mode=(
                parse_placement_mode(self.placement_mode) if self.placement_mode
                else base.placement_mode
            ),
            storage_season=(
                parse_storage_season(self.storage_season) if self.storage_season
                else base.storage_season
            ),
        )
