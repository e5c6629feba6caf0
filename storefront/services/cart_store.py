"""Session cart store"""

import logging
from decimal import Decimal
from typing import Optional

from ..core.events import EventDispatcher, StoreEvent
from ..models.cart import CartState
from ..models.line_item import LineItem, to_money

logger = logging.getLogger(__name__)


class CartStore:
    """
    In-memory, single-writer cart for one session.

    Every mutation goes through a method here and ends by recomputing the
    total from the full item list, then notifying observers.
    """

    def __init__(self, cart_id: str, events: Optional[EventDispatcher] = None):
        self.cart_id = cart_id
        self.events = events or EventDispatcher()
        self._state = CartState()

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> list[LineItem]:
        return self._state.items

    @property
    def total(self) -> Decimal:
        return self._state.total

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def snapshot(self) -> CartState:
        """Deep copy of the current cart for readers"""
        return self._state.model_copy(deep=True)

    def add_item(self, item: LineItem) -> CartState:
        """Add an item, merging into an existing line with the same id"""
        existing_item = self._state.get_item(item.id)

        if existing_item:
            existing_item.quantity += item.quantity
        else:
            self._state.items.append(item.model_copy(deep=True))

        self._recalculate_total()
        self._notify(StoreEvent.CART_ITEM_ADDED, item_id=item.id, quantity=item.quantity)
        return self._state

    def remove_item(self, item_id: str) -> CartState:
        """Remove a line; unknown ids are ignored"""
        self._state.items = [i for i in self._state.items if i.id != item_id]
        self._recalculate_total()
        self._notify(StoreEvent.CART_ITEM_REMOVED, item_id=item_id)
        return self._state

    def update_quantity(self, item_id: str, quantity: int) -> CartState:
        """Set a line's quantity; zero or less removes the line"""
        item = self._state.get_item(item_id)

        if item:
            if quantity <= 0:
                self._state.items = [i for i in self._state.items if i.id != item_id]
            else:
                item.quantity = quantity

        self._recalculate_total()
        self._notify(StoreEvent.CART_QUANTITY_UPDATED, item_id=item_id, quantity=quantity)
        return self._state

    def toggle_open(self) -> CartState:
        """Flip the cart overlay visibility"""
        self._state.is_open = not self._state.is_open
        event = StoreEvent.CART_OPENED if self._state.is_open else StoreEvent.CART_CLOSED
        self._notify(event)
        return self._state

    def open(self) -> CartState:
        self._state.is_open = True
        self._notify(StoreEvent.CART_OPENED)
        return self._state

    def close(self) -> CartState:
        self._state.is_open = False
        self._notify(StoreEvent.CART_CLOSED)
        return self._state

    def clear(self) -> CartState:
        """Empty the cart and hide the overlay"""
        self._state.items = []
        self._state.is_open = False
        self._recalculate_total()
        self._notify(StoreEvent.CART_CLEARED)
        return self._state

    def validate_catalog_hash(self, current_hash: str) -> bool:
        """
        Drop the cart if it was built against a different catalog.

        Returns:
            True if the cart was cleared
        """
        stored_hash = self._state.catalog_hash
        self._state.catalog_hash = current_hash

        if not self._state.items:
            return False

        if stored_hash != current_hash:
            logger.info(f"Cart {self.cart_id} invalidated - product data has changed")
            self._state.items = []
            self._recalculate_total()
            self._notify(StoreEvent.CART_INVALIDATED, catalog_hash=current_hash)
            return True

        return False

    def _recalculate_total(self) -> None:
        """Recalculate cart total from every line"""
        self._state.total = to_money(sum((item.line_total for item in self._state.items), Decimal("0")))

    def _notify(self, event: StoreEvent, **payload) -> None:
        self.events.dispatch(
            event,
            cart_id=self.cart_id,
            total=self._state.total,
            item_count=self._state.item_count,
            is_open=self._state.is_open,
            **payload,
        )
