"""Product models for the storefront catalog"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class ProductCategory(str, Enum):
    FASHION = "fashion"
    ELECTRONICS = "electronics"


class Variant(BaseModel):
    """A purchasable variant of a product (size, color, model)"""
    id: str
    sku: str
    attributes: dict[str, str] = {}
    image: str
    price: Decimal = Field(ge=0)
    in_stock: bool = True


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    category: ProductCategory
    description: str
    images: list[str] = []
    price: Decimal = Field(ge=0)  # used only for products without variants
    variants: Optional[list[Variant]] = None
    featured: bool = False

    def get_variant(self, variant_id: str) -> Optional[Variant]:
        """Get a variant by ID"""
        return next((v for v in self.variants or [] if v.id == variant_id), None)

    @property
    def in_stock(self) -> bool:
        if not self.variants:
            return True
        return any(v.in_stock for v in self.variants)


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[Product]
    total: int
    limit: int
    offset: int


class CatalogHashResponse(BaseModel):
    """Current catalog fingerprint"""
    hash: str
