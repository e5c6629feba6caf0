"""Line item model: one cart row"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from .product import Product

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Quantize a value to two decimal places"""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def make_line_item_id(product_id: str, attributes: Optional[dict[str, str]] = None) -> str:
    """
    Build a line id for a product selection.

    Selections of the same product with different attributes get distinct
    ids; attribute order does not matter.
    """
    if not attributes:
        return product_id
    parts = ";".join(f"{k}={v}" for k, v in sorted(attributes.items()))
    return f"{product_id}:{parts}"


class LineItem(BaseModel):
    """Product selection and quantity in a cart"""
    id: str
    product_id: str
    name: str
    image: str = ""
    price: Decimal = Field(ge=0)
    attributes: Optional[dict[str, str]] = None
    quantity: int = Field(default=1, ge=1)

    @field_validator("price", mode="before")
    @classmethod
    def _quantize_price(cls, value):
        try:
            return to_money(value)
        except (InvalidOperation, TypeError):
            raise ValueError("price must be a number")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __eq__(self, other) -> bool:
        if isinstance(other, LineItem):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_product(
        cls,
        product: "Product",
        variant_id: Optional[str] = None,
        quantity: int = 1,
        attributes: Optional[dict[str, str]] = None,
    ) -> "LineItem":
        """
        Create a line item from a catalog product.

        A catalog variant supplies the id, price, image and attributes.
        Without one, free-form attributes are folded into the line id.
        """
        if variant_id is None:
            return cls(
                id=make_line_item_id(product.id, attributes),
                product_id=product.id,
                name=product.name,
                image=product.images[0] if product.images else "",
                price=product.price,
                attributes=attributes or None,
                quantity=quantity,
            )

        variant = product.get_variant(variant_id)
        if variant is None:
            raise ValueError(f"Unknown variant {variant_id} for product {product.id}")

        return cls(
            id=variant.id,
            product_id=product.id,
            name=product.name,
            image=variant.image,
            price=variant.price,
            attributes=dict(variant.attributes) or None,
            quantity=quantity,
        )
