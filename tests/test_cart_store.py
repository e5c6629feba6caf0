from __future__ import annotations

import random
from decimal import Decimal

from storefront.core.events import EventDispatcher, StoreEvent
from storefront.services.cart_store import CartStore
from tests.conftest import make_item


def _expected_total(cart: CartStore) -> Decimal:
    return sum((item.price * item.quantity for item in cart.items), Decimal("0"))


def test_add_update_remove_scenario(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price=100, quantity=1))
    assert cart.total == Decimal("100.00")

    cart.add_item(make_item("p1", price=100, quantity=1))
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 2
    assert cart.total == Decimal("200.00")

    cart.update_quantity("p1", 0)
    assert cart.items == []
    assert cart.total == Decimal("0.00")


def test_add_merges_by_id_with_incoming_quantity(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10", quantity=2))
    cart.add_item(make_item("p1", price="10", quantity=3))

    assert [(i.id, i.quantity) for i in cart.items] == [("p1", 5)]
    assert cart.total == Decimal("50.00")


def test_same_product_different_variants_are_separate_lines(cart: CartStore) -> None:
    cart.add_item(make_item("shirt-white-s", product_id="shirt", price="89"))
    cart.add_item(make_item("shirt-white-m", product_id="shirt", price="89"))

    assert [i.id for i in cart.items] == ["shirt-white-s", "shirt-white-m"]
    assert cart.total == Decimal("178.00")


def test_items_keep_insertion_order(cart: CartStore) -> None:
    for item_id in ("c", "a", "b"):
        cart.add_item(make_item(item_id, price="1"))
    cart.add_item(make_item("a", price="1"))

    assert [i.id for i in cart.items] == ["c", "a", "b"]


def test_added_item_is_copied(cart: CartStore) -> None:
    item = make_item("p1", price="10")
    cart.add_item(item)

    item.quantity = 99

    assert cart.items[0].quantity == 1
    assert cart.total == Decimal("10.00")


def test_update_quantity_zero_or_negative_removes_line(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10"))
    cart.add_item(make_item("p2", price="20"))

    cart.update_quantity("p1", 0)
    cart.update_quantity("p2", -3)

    assert cart.items == []
    assert cart.total == Decimal("0.00")


def test_update_quantity_sets_value_without_clamping(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="2.50"))

    cart.update_quantity("p1", 1000)

    assert cart.items[0].quantity == 1000
    assert cart.total == Decimal("2500.00")


def test_update_quantity_unknown_id_is_noop(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10"))

    cart.update_quantity("missing", 4)

    assert [(i.id, i.quantity) for i in cart.items] == [("p1", 1)]
    assert cart.total == Decimal("10.00")


def test_remove_unknown_id_leaves_cart_unchanged(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10", quantity=2))
    before = cart.snapshot()

    cart.remove_item("missing")

    assert [(i.id, i.quantity) for i in cart.items] == [(i.id, i.quantity) for i in before.items]
    assert cart.total == before.total


def test_remove_item(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10"))
    cart.add_item(make_item("p2", price="5"))

    cart.remove_item("p1")

    assert [i.id for i in cart.items] == ["p2"]
    assert cart.total == Decimal("5.00")


def test_total_matches_full_reduction_after_every_mutation() -> None:
    rng = random.Random(1234)
    cart = CartStore(cart_id="fuzz")
    ids = ["a", "b", "c", "d"]
    prices = {"a": "0.10", "b": "19.99", "c": "250", "d": "3.33"}

    for _ in range(500):
        item_id = rng.choice(ids)
        op = rng.choice(["add", "remove", "update"])
        if op == "add":
            cart.add_item(make_item(item_id, price=prices[item_id], quantity=rng.randint(1, 3)))
        elif op == "remove":
            cart.remove_item(item_id)
        else:
            cart.update_quantity(item_id, rng.randint(-2, 5))

        assert cart.total == _expected_total(cart)
        assert all(item.quantity >= 1 for item in cart.items)
        assert len({item.id for item in cart.items}) == len(cart.items)


def test_toggle_and_close_only_touch_visibility(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10", quantity=2))

    cart.toggle_open()
    assert cart.is_open is True
    cart.toggle_open()
    assert cart.is_open is False
    cart.open()
    cart.close()
    assert cart.is_open is False

    assert [(i.id, i.quantity) for i in cart.items] == [("p1", 2)]
    assert cart.total == Decimal("20.00")


def test_clear_resets_items_total_and_visibility(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10"))
    cart.open()

    cart.clear()

    assert cart.items == []
    assert cart.total == Decimal("0.00")
    assert cart.is_open is False


def test_snapshot_is_independent(cart: CartStore) -> None:
    cart.add_item(make_item("p1", price="10"))
    snapshot = cart.snapshot()

    cart.update_quantity("p1", 5)

    assert snapshot.items[0].quantity == 1
    assert snapshot.total == Decimal("10.00")


def test_mutations_notify_observers(cart: CartStore, recorder) -> None:
    cart.add_item(make_item("p1", price="10"))
    cart.update_quantity("p1", 3)
    cart.toggle_open()
    cart.remove_item("p1")
    cart.clear()

    assert recorder.events == [
        StoreEvent.CART_ITEM_ADDED,
        StoreEvent.CART_QUANTITY_UPDATED,
        StoreEvent.CART_OPENED,
        StoreEvent.CART_ITEM_REMOVED,
        StoreEvent.CART_CLEARED,
    ]
    _, payload = recorder.calls[1]
    assert payload["cart_id"] == "test-cart"
    assert payload["total"] == Decimal("30.00")
    assert payload["item_count"] == 3


def test_failing_observer_does_not_block_mutation() -> None:
    events = EventDispatcher()

    def broken(event, payload):
        raise RuntimeError("animation crashed")

    events.subscribe(broken)
    cart = CartStore(cart_id="c1", events=events)

    cart.add_item(make_item("p1", price="10"))

    assert cart.total == Decimal("10.00")


def test_observer_filtered_by_event(recorder) -> None:
    events = EventDispatcher()
    events.subscribe(recorder, event=StoreEvent.CART_CLEARED)
    cart = CartStore(cart_id="c1", events=events)

    cart.add_item(make_item("p1", price="10"))
    cart.clear()

    assert recorder.events == [StoreEvent.CART_CLEARED]

    events.unsubscribe(recorder)
    cart.clear()
    assert recorder.events == [StoreEvent.CART_CLEARED]


def test_catalog_hash_adopted_when_cart_empty(cart: CartStore) -> None:
    assert cart.validate_catalog_hash("h1") is False
    assert cart.state.catalog_hash == "h1"

    assert cart.validate_catalog_hash("h2") is False
    assert cart.state.catalog_hash == "h2"


def test_catalog_hash_change_clears_filled_cart(cart: CartStore, recorder) -> None:
    cart.validate_catalog_hash("h1")
    cart.add_item(make_item("p1", price="10"))

    assert cart.validate_catalog_hash("h1") is False
    assert len(cart.items) == 1

    assert cart.validate_catalog_hash("h2") is True
    assert cart.items == []
    assert cart.total == Decimal("0.00")
    assert cart.state.catalog_hash == "h2"
    assert recorder.events[-1] == StoreEvent.CART_INVALIDATED


def test_catalog_hash_clears_cart_filled_before_any_hash(cart: CartStore, recorder) -> None:
    cart.add_item(make_item("p1", price="10"))

    assert cart.validate_catalog_hash("h1") is True
    assert cart.items == []
    assert cart.total == Decimal("0.00")
    assert cart.state.catalog_hash == "h1"
    assert recorder.events[-1] == StoreEvent.CART_INVALIDATED

    cart.add_item(make_item("p1", price="10"))
    assert cart.validate_catalog_hash("h1") is False
    assert len(cart.items) == 1
