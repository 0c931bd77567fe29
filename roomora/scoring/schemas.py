"""
Filter models for the scoring engine.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BudgetRange(BaseModel):
    """
    Nightly price constraint.

    Only max: price < max. Only min: price > min. Both: min <= price <= max.
    any=True disables the filter.
    """

    model_config = ConfigDict(frozen=True)

    min: Optional[int] = Field(default=None, ge=0, description="Lower bound in NPR")
    max: Optional[int] = Field(default=None, ge=0, description="Upper bound in NPR")
    any: bool = Field(default=False, description="Accept every price")

    def matches(self, price: int) -> bool:
        if self.any:
            return True
        if self.min is not None and self.max is not None:
            return self.min <= price <= self.max
        if self.max is not None:
            return price < self.max
        if self.min is not None:
            return price > self.min
        return True

    @property
    def is_restrictive(self) -> bool:
        """True when the range actually excludes some prices."""
        return not self.any and (self.min is not None or self.max is not None)
