from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ProductCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    sku: str = Field(min_length=1, max_length=50)
    price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    initial_stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)

    @field_validator("name", "sku")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return "" if v is None else v


class ProductOut(CamelModel):
    id: int
    name: str
    description: str
    sku: str
    price: Decimal
    stock_quantity: int
    reorder_level: int
    is_active: bool
    is_low_stock: bool


class LowStockProductOut(ProductOut):
    shortfall: int
