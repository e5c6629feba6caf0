"""
Order placement

Collaborators that take a checkout snapshot and turn it into an order.
The simulated placement keeps orders in memory; the HTTP placement sends
them to a remote order API.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from ..database.orders import OrderDatabase, snapshot_to_order_items
from ..models.checkout import Order, OrderSnapshot, OrderStatus
from ..models.line_item import to_money

logger = logging.getLogger(__name__)


class OrderPlacementError(Exception):
    """Order placement was rejected or could not be completed"""


class OrderPlacement:
    """Interface for order placement collaborators"""

    async def place_order(self, snapshot: OrderSnapshot) -> Order:
        raise NotImplementedError

    async def close(self) -> None:
        """Release resources held by the collaborator"""


class SimulatedOrderPlacement(OrderPlacement):
    """
    In-process placement for pay-on-delivery orders.

    Records the order as pending, waits a fixed delay to stand in for the
    round trip, then marks it placed. Never fails.
    """

    def __init__(self, order_db: OrderDatabase, delay_seconds: float = 2.0):
        self.order_db = order_db
        self.delay_seconds = delay_seconds

    async def place_order(self, snapshot: OrderSnapshot) -> Order:
        order = self.order_db.create_order(snapshot)
        logger.debug(f"Order {order.order_id} pending, simulating placement")

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        return self.order_db.update_status(order.order_id, OrderStatus.PLACED)


class HttpOrderPlacement(OrderPlacement):
    """
    Client for a remote order API.

    POSTs the snapshot to /user/orders and expects {id, backend_total}.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        order_db: Optional[OrderDatabase] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize order API client.

        Args:
            base_url: Base URL of the order API
            timeout: Request timeout in seconds
            order_db: Local record of placed orders, if any
            client: Pre-built HTTP client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.order_db = order_db
        self._http_client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    @staticmethod
    def build_payload(snapshot: OrderSnapshot) -> dict[str, Any]:
        """Translate a snapshot into the order API request body"""
        items = []
        for item in snapshot.items:
            entry: dict[str, Any] = {
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price": float(item.price),
            }
            if item.id != item.product_id:
                entry["variant_id"] = item.id
            items.append(entry)

        form = snapshot.form
        return {
            "items": items,
            "shipping": {
                "full_name": form.full_name.strip(),
                "line1": form.address.strip(),
                "postal_code": form.zip_code.strip(),
                "phone": "".join(form.phone.split()),
            },
            "total": float(snapshot.grand_total),
        }

    async def place_order(self, snapshot: OrderSnapshot) -> Order:
        url = f"{self.base_url}/user/orders"

        try:
            response = await self._http_client.post(url, json=self.build_payload(snapshot))
        except httpx.HTTPError as e:
            logger.error(f"Order API request failed: {e}")
            raise OrderPlacementError(f"Could not reach order service: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Order API rejected order: {response.status_code} - {response.text}")
            raise OrderPlacementError(f"Order service rejected the order ({response.status_code})")

        try:
            data = response.json()
            order_id = str(data["id"])
        except (ValueError, KeyError, TypeError) as e:
            raise OrderPlacementError("Order service returned an unexpected response") from e

        backend_total = data.get("backend_total")
        if backend_total is not None and to_money(backend_total) != snapshot.grand_total:
            logger.warning(
                f"Order {order_id}: backend total {backend_total} differs from "
                f"checkout total {snapshot.grand_total}"
            )

        if self.order_db is not None:
            return self.order_db.create_order(snapshot, order_id=order_id, status=OrderStatus.PLACED)

        now = datetime.utcnow()
        return Order(
            order_id=order_id,
            status=OrderStatus.PLACED,
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
