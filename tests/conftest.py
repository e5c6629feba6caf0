"""Shared pytest fixtures for cart and checkout tests."""
from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.core.dependencies import get_session_manager
from storefront.core.events import EventDispatcher
from storefront.core.session import SessionManager
from storefront.database.orders import OrderDatabase, order_db
from storefront.main import app
from storefront.models.line_item import LineItem
from storefront.services.cart_store import CartStore
from storefront.services.checkout_form import CheckoutFormState
from storefront.services.order_placement import SimulatedOrderPlacement
from storefront.services.shipping import ShippingPolicy


class RecordingObserver:
    """Collects (event, payload) pairs dispatched to it."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, event, payload) -> None:
        self.calls.append((event, payload))

    @property
    def events(self) -> list:
        return [event for event, _ in self.calls]


def make_item(item_id: str = "p1", price="100", quantity: int = 1, **kwargs) -> LineItem:
    return LineItem(
        id=item_id,
        product_id=kwargs.pop("product_id", item_id),
        name=kwargs.pop("name", f"Product {item_id}"),
        price=price,
        quantity=quantity,
        **kwargs,
    )


VALID_FORM = {
    "full_name": "Asha Rao",
    "phone": "98765 43210",
    "email": "asha@example.com",
    "address": "12 MG Road, Bengaluru",
    "zip_code": "560001",
}


@pytest.fixture()
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def events(recorder: RecordingObserver) -> EventDispatcher:
    dispatcher = EventDispatcher()
    dispatcher.subscribe(recorder)
    return dispatcher


@pytest.fixture()
def cart(events: EventDispatcher) -> CartStore:
    return CartStore(cart_id="test-cart", events=events)


@pytest.fixture()
def shipping() -> ShippingPolicy:
    return ShippingPolicy(threshold=Decimal("200"), fee=Decimal("25"), currency="INR")


@pytest.fixture()
def form_state() -> CheckoutFormState:
    state = CheckoutFormState()
    state.update(**VALID_FORM)
    return state


@pytest.fixture()
def orders() -> OrderDatabase:
    return OrderDatabase()


@pytest.fixture()
def session_manager(shipping: ShippingPolicy) -> SessionManager:
    return SessionManager(
        placement=SimulatedOrderPlacement(order_db, delay_seconds=0),
        shipping=shipping,
        redirect_path="/",
    )


@pytest.fixture()
def client(session_manager: SessionManager):
    app.dependency_overrides[get_session_manager] = lambda: session_manager
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def session_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/session")
    assert response.status_code == 200
    return {"X-Session-Id": response.json()["session_id"]}
