from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator

from kopi_cafe.models import DiscountTypeEnum
from kopi_cafe.pricing import money


class DiscountValidateRequest(BaseModel):
    code: Optional[str] = None
    subtotal: Decimal = Decimal("0")

    @field_validator("code", mode="before")
    @classmethod
    def strip_code(cls, value):
        if value is None:
            return None
        return str(value).strip()

    @field_validator("subtotal", mode="before")
    @classmethod
    def lenient_subtotal(cls, value):
        return money(value)


class DiscountValidation(BaseModel):
    valid: bool = True
    code: str
    discount_type: DiscountTypeEnum
    discount_value: Decimal
    discount_amount: Decimal
