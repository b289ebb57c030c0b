import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    """Empty cells arrive as '', None or NaN depending on the reader; treat them all as null."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    # pandas.NA and friends
    if type(value).__name__ in ("NAType", "NaTType"):
        return None
    return value


class InventoryRecord(BaseModel):
    """
    Defines the data contract for a single SKU row of the inventory dataset.
    Every column is present but nullable: missing values are a data-quality
    concern for the validator, while a value of the wrong type is a
    structural error surfaced at load time.
    """

    sku_id: Optional[int] = Field(default=None, alias="sku_id")
    category: Optional[str] = Field(..., alias="category")
    name: Optional[str] = Field(..., alias="name")
    mrp: Optional[float] = Field(..., alias="mrp")
    discount_percent: Optional[float] = Field(..., alias="discountPercent")
    available_quantity: Optional[int] = Field(..., alias="availableQuantity")
    discounted_selling_price: Optional[float] = Field(..., alias="discountedSellingPrice")
    weight_in_gms: Optional[int] = Field(..., alias="weightInGms")
    out_of_stock: Optional[bool] = Field(..., alias="outOfStock")
    quantity: Optional[int] = Field(..., alias="quantity")

    class Config:
        # Build models from DataFrame rows (camelCase) and export them with the same headers.
        populate_by_name = True

    @field_validator(
        "mrp",
        "discount_percent",
        "available_quantity",
        "discounted_selling_price",
        "weight_in_gms",
        "quantity",
        mode="before",
    )
    @classmethod
    def _empty_numeric_is_null(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("out_of_stock", mode="before")
    @classmethod
    def _stock_flag(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        # SQL BIT exports come through as 0/1, sometimes as 0.0/1.0
        if isinstance(value, float) and value in (0.0, 1.0):
            return int(value)
        return value

    @field_validator("category", "name", mode="before")
    @classmethod
    def _text_as_str(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is None:
            return None
        return str(value).strip()


class ValidationReport(BaseModel):
    """
    Ids of the records violating each data-quality rule.
    Produced by the validator without touching the table.
    """

    missing_fields: list[int] = Field(default_factory=list, alias="missingFields")
    price_inconsistent: list[int] = Field(default_factory=list, alias="priceInconsistent")
    non_positive_price: list[int] = Field(default_factory=list, alias="nonPositivePrice")
    stock_flag_mismatch: list[int] = Field(default_factory=list, alias="stockFlagMismatch")
    incomplete_fields: list[int] = Field(default_factory=list, alias="incompleteFields")

    class Config:
        populate_by_name = True

    def summary(self) -> dict[str, int]:
        """Violation counts keyed by the camelCase category name."""
        return {
            info.alias or name: len(getattr(self, name))
            for name, info in ValidationReport.model_fields.items()
        }

    @property
    def total_violations(self) -> int:
        return sum(self.summary().values())

    @property
    def is_clean(self) -> bool:
        return self.total_violations == 0
