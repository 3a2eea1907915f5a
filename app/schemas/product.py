from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer


# Prices travel as JSON numbers so clients get back exactly what they posted.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductBase(BaseModel):
    category_id: int
    product_name: str = Field(..., min_length=1, max_length=255)
    product_description: Optional[str] = Field(default=None, max_length=1000)
    product_stock: int = Field(..., ge=0)
    product_price: Price = Field(..., ge=0, max_digits=10, decimal_places=2)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    id: int = Field(..., validation_alias=AliasChoices("id", "_id"))


class ProductRead(BaseModel):
    """Row as stored; the write-side limits are not re-checked on the way out."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    product_name: str
    product_description: Optional[str] = None
    product_stock: int
    product_price: Price
