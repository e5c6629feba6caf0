"""Shipping cost policy and order summary"""

from decimal import Decimal
from typing import Optional

from ..core.config import settings
from ..models.cart import CartState
from ..models.checkout import OrderSummary, SummaryItem
from ..models.line_item import to_money


class ShippingPolicy:
    """Flat fee below the free-shipping threshold, free at or above it"""

    def __init__(
        self,
        threshold: Optional[Decimal] = None,
        fee: Optional[Decimal] = None,
        currency: Optional[str] = None,
    ):
        self.threshold = to_money(settings.free_shipping_threshold if threshold is None else threshold)
        self.fee = to_money(settings.shipping_fee if fee is None else fee)
        self.currency = currency or settings.currency

    def shipping_for(self, total: Decimal) -> Decimal:
        """Shipping charged for a cart total"""
        if total >= self.threshold:
            return to_money(0)
        return self.fee

    def final_total(self, total: Decimal) -> Decimal:
        """Cart total plus shipping"""
        return to_money(total + self.shipping_for(total))

    def amount_to_free_shipping(self, total: Decimal) -> Decimal:
        """How much more the purchaser must add to ship for free"""
        return to_money(max(self.threshold - total, Decimal("0")))

    def summarize(self, cart: CartState) -> OrderSummary:
        """Build the checkout summary for a cart"""
        return OrderSummary(
            items=[
                SummaryItem(
                    id=item.id,
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    attributes=item.attributes,
                )
                for item in cart.items
            ],
            subtotal=cart.total,
            shipping=self.shipping_for(cart.total),
            total=self.final_total(cart.total),
            amount_to_free_shipping=self.amount_to_free_shipping(cart.total),
            currency=self.currency,
        )
