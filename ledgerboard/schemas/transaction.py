from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledgerboard.core.money import parse_amount_strict

TransactionType = Literal["sale", "purchase", "expense"]


class TransactionBase(BaseModel):
    type: TransactionType
    amount: Decimal
    description: str = Field(min_length=1)
    category: Optional[str] = None
    inventory_item_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, gt=0)

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, value):
        return parse_amount_strict(value)


class TransactionCreate(TransactionBase):
    date: Optional[datetime] = None


class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    date: Optional[datetime] = None
    inventory_item_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, gt=0)

    @field_validator("type", "amount", "description", mode="before")
    @classmethod
    def _reject_null(cls, value, info):
        # omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("{} cannot be null".format(info.field_name))
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, value):
        return parse_amount_strict(value)


class TransactionRead(TransactionBase):
    id: int
    user_id: int
    date: datetime

    model_config = ConfigDict(from_attributes=True)
