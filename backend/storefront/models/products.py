"""
Pydantic Product Models

Read-only catalog projection.
"""
from typing import List
from pydantic import Field

from .common import CamelModel, OffsetPagination


class Price(CamelModel):
    amount: int = Field(gt=0)
    currency: str


class Inventory(CamelModel):
    quantity: int = Field(ge=0)


class Specifications(CamelModel):
    brand: str
    features: List[str] = Field(min_length=1)


class Ratings(CamelModel):
    average: float = Field(gt=0, le=5)
    count: int = Field(ge=0)


class ProductMetadata(CamelModel):
    is_featured: bool
    category: str


class Product(CamelModel):
    id: str = Field(pattern="^prod_")
    name: str
    description: str
    price: Price
    inventory: Inventory
    specifications: Specifications
    ratings: Ratings
    metadata: ProductMetadata


class ProductList(CamelModel):
    data: List[Product]
    pagination: OffsetPagination
