from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledgerboard.core.constants import DEFAULT_UNIT
from ledgerboard.core.money import parse_amount_strict


def _optional_price(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_amount_strict(value, field="price_per_unit")


class InventoryItemBase(BaseModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None
    current_stock: int = Field(default=0, ge=0)
    min_stock_level: int = Field(default=0, ge=0)
    unit: str = DEFAULT_UNIT
    price_per_unit: Optional[Decimal] = None
    supplier: Optional[str] = None

    @field_validator("price_per_unit", mode="before")
    @classmethod
    def _validate_price(cls, value):
        return _optional_price(value)


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    current_stock: Optional[int] = Field(default=None, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None
    price_per_unit: Optional[Decimal] = None
    supplier: Optional[str] = None

    @field_validator("price_per_unit", mode="before")
    @classmethod
    def _validate_price(cls, value):
        return _optional_price(value)


class InventoryItemRead(InventoryItemBase):
    id: int
    user_id: int
    last_restocked: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
