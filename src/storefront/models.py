"""Cart records as they are held in memory and persisted on the device."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CartItem(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    max_quantity: int | None = Field(default=None, ge=1)
    image: str | None = None
    variant: str | None = None

    @model_validator(mode="after")
    def _within_max_quantity(self):
        if self.max_quantity is not None and self.quantity > self.max_quantity:
            raise ValueError(f"quantity {self.quantity} exceeds the maximum of {self.max_quantity}")
        return self

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def clamp(self, quantity: int) -> int:
        """Limit ``quantity`` to this item's per-cart maximum, if it has one."""
        if self.max_quantity is not None:
            return min(quantity, self.max_quantity)
        return quantity


class Discount(BaseModel):
    code: str | None = None
    amount: float = Field(default=0.0, ge=0)
    type: DiscountType = DiscountType.PERCENTAGE

    @model_validator(mode="after")
    def _percentage_in_range(self):
        if self.type is DiscountType.PERCENTAGE and self.amount > 100:
            raise ValueError("percentage discount cannot exceed 100")
        return self

    @classmethod
    def none(cls) -> "Discount":
        return cls()

    @property
    def is_active(self) -> bool:
        return bool(self.code) and self.amount > 0

    def apply(self, total: float) -> float:
        """Return ``total`` with this discount taken off, never below zero."""
        if self.type is DiscountType.PERCENTAGE:
            reduced = total - total * self.amount / 100
        else:
            reduced = total - self.amount
        return max(0.0, reduced)
