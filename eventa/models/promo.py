# eventa/models/promo.py
from enum import Enum
from typing import Optional

from pydantic import model_validator

from eventa.models.base import ApiModel


class DiscountKind(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountCheck(ApiModel):
    """Answer of the discount validation endpoint."""

    valid: bool
    discount_type: Optional[DiscountKind] = None
    discount_value: float = 0
    message: Optional[str] = None

    @model_validator(mode="after")
    def valid_code_has_a_kind(self):
        if self.valid and self.discount_type is None:
            raise ValueError("a valid discount must say whether it is 'percentage' or 'fixed'")
        return self


class DiscountResult(ApiModel):
    valid: bool = False
    adjusted_total: Optional[float] = None
