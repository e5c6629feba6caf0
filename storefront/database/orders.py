"""Order storage for the storefront"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.checkout import Order, OrderItem, OrderStatus, OrderSnapshot


def snapshot_to_order_items(snapshot: OrderSnapshot) -> list[OrderItem]:
    """Convert snapshot line items to order items"""
    return [
        OrderItem(
            product_id=item.product_id,
            variant_id=item.id if item.id != item.product_id else None,
            name=item.name,
            quantity=item.quantity,
            unit_price=item.price,
            total_price=item.line_total,
        )
        for item in snapshot.items
    ]


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}

    def create_order(
        self,
        snapshot: OrderSnapshot,
        order_id: Optional[str] = None,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create an order from a checkout snapshot"""
        now = datetime.utcnow()

        order = Order(
            order_id=order_id or f"ORD-{uuid.uuid4().hex[:8].upper()}",
            status=status,
            items=snapshot_to_order_items(snapshot),
            subtotal=snapshot.total,
            shipping=snapshot.shipping,
            total=snapshot.grand_total,
            currency=snapshot.currency,
            customer=snapshot.form.model_copy(),
            payment_method=snapshot.form.payment_method,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.order_id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Update order status"""
        order = self.get_order(order_id)
        if not order:
            return None

        order.status = status
        order.updated_at = datetime.utcnow()
        return order

    def list_orders(self, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = list(self.orders.values())
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]


# Singleton instance
order_db = OrderDatabase()
