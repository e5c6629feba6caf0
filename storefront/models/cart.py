"""Cart models for the storefront"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from .line_item import LineItem
from .checkout import OrderSummary


class CartState(BaseModel):
    """Shopping cart contents and overlay visibility"""
    items: list[LineItem] = []
    total: Decimal = Decimal("0.00")
    is_open: bool = False
    catalog_hash: Optional[str] = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def get_item(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self.items if item.id == item_id), None)


class AddToCartRequest(BaseModel):
    """Request to add a product selection to the cart"""
    product_id: str
    variant_id: Optional[str] = None
    attributes: Optional[dict[str, str]] = None
    quantity: int = Field(default=1, gt=0)


class UpdateQuantityRequest(BaseModel):
    """Request to set a line's quantity; zero or less removes the line"""
    quantity: int


class ValidateHashRequest(BaseModel):
    """Catalog hash to validate the cart against; defaults to the live catalog"""
    hash: Optional[str] = None


class CartResponse(BaseModel):
    """Cart API response"""
    cart: CartState
    summary: OrderSummary
    item_count: int
    message: Optional[str] = None
