"""
Store events

Observers (cart overlay, page transitions, toasts) subscribe here to learn
about cart and checkout state transitions. Observers only read; the cart
store and submission pipeline are the only writers.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Observer = Callable[["StoreEvent", dict[str, Any]], None]


class StoreEvent(str, Enum):
    CART_ITEM_ADDED = "cart_item_added"
    CART_ITEM_REMOVED = "cart_item_removed"
    CART_QUANTITY_UPDATED = "cart_quantity_updated"
    CART_CLEARED = "cart_cleared"
    CART_OPENED = "cart_opened"
    CART_CLOSED = "cart_closed"
    CART_INVALIDATED = "cart_invalidated"

    CHECKOUT_STATE_CHANGED = "checkout_state_changed"
    ORDER_PLACED = "order_placed"


class EventDispatcher:
    """Fan-out of store events to registered observers"""

    def __init__(self):
        self._observers: list[tuple[Optional[StoreEvent], Observer]] = []

    def subscribe(self, observer: Observer, event: Optional[StoreEvent] = None) -> None:
        """
        Register an observer.

        Args:
            observer: Callable receiving (event, payload)
            event: Only deliver this event type; None delivers all events
        """
        self._observers.append((event, observer))

    def unsubscribe(self, observer: Observer) -> None:
        """Remove every registration of an observer"""
        self._observers = [(e, o) for e, o in self._observers if o is not observer]

    def dispatch(self, event: StoreEvent, **payload: Any) -> None:
        """Deliver an event to matching observers"""
        for wanted, observer in list(self._observers):
            if wanted is not None and wanted != event:
                continue
            try:
                observer(event, payload)
            except Exception:
                # A failing observer must not undo a state transition
                logger.exception(f"Observer {observer!r} failed on {event.value}")


def log_store_event(event: StoreEvent, payload: dict[str, Any]) -> None:
    """Debug observer that logs every store event"""
    logger.debug(f"{event.value}: {payload}")
