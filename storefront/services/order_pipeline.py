"""
Order submission pipeline

Drives one checkout attempt: validate the form, hand a snapshot of the
cart and form to order placement, then clear the cart on success.

    idle -> validating -> submitting -> succeeded
    validating -> idle (form errors)
    submitting -> failed (placement error; submit() again to retry)
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.events import EventDispatcher, StoreEvent
from ..models.checkout import Order, OrderSnapshot, SubmissionState
from .cart_store import CartStore
from .checkout_form import CheckoutFormState
from .order_placement import OrderPlacement, OrderPlacementError
from .shipping import ShippingPolicy

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Base class for submission errors raised to the caller"""


class SubmissionInProgressError(CheckoutError):
    """A submission is already awaiting order placement"""


class SubmissionClosedError(CheckoutError):
    """The submission already succeeded; start a new checkout"""


class EmptyCartError(CheckoutError):
    """Nothing to order"""


@dataclass
class SubmissionResult:
    """Outcome of one submit() call"""
    state: SubmissionState
    errors: dict[str, str] = field(default_factory=dict)
    order: Optional[Order] = None
    failure_reason: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state == SubmissionState.SUCCEEDED


class OrderSubmission:
    """Single checkout attempt over a session's cart and form"""

    def __init__(
        self,
        cart: CartStore,
        form_state: CheckoutFormState,
        placement: OrderPlacement,
        shipping: Optional[ShippingPolicy] = None,
        events: Optional[EventDispatcher] = None,
        redirect_path: str = "/",
    ):
        self.cart = cart
        self.form_state = form_state
        self.placement = placement
        self.shipping = shipping or ShippingPolicy()
        self.events = events or cart.events
        self.redirect_path = redirect_path

        self.state = SubmissionState.IDLE
        self.failure_reason: Optional[str] = None
        self.order: Optional[Order] = None

    @property
    def can_submit(self) -> bool:
        """Whether the submit control should be enabled"""
        return self.state in (SubmissionState.IDLE, SubmissionState.FAILED)

    def build_snapshot(self) -> OrderSnapshot:
        """Freeze the current cart and form for placement"""
        cart = self.cart.snapshot()
        return OrderSnapshot(
            items=cart.items,
            total=cart.total,
            shipping=self.shipping.shipping_for(cart.total),
            grand_total=self.shipping.final_total(cart.total),
            currency=self.shipping.currency,
            form=self.form_state.form.model_copy(deep=True),
        )

    async def submit(self) -> SubmissionResult:
        """
        Run validation and, if it passes, place the order.

        Raises:
            SubmissionInProgressError: placement is already in flight
            SubmissionClosedError: this submission already succeeded
            EmptyCartError: the form is valid but the cart has no items
        """
        if self.state == SubmissionState.SUBMITTING:
            raise SubmissionInProgressError("Order is already being submitted")
        if self.state == SubmissionState.SUCCEEDED:
            raise SubmissionClosedError("Order was already placed")

        self.failure_reason = None
        self._transition(SubmissionState.VALIDATING)

        if not self.form_state.validate():
            self._transition(SubmissionState.IDLE)
            return SubmissionResult(state=self.state, errors=dict(self.form_state.errors))

        if not self.cart.items:
            self._transition(SubmissionState.IDLE)
            raise EmptyCartError("Cart is empty")

        snapshot = self.build_snapshot()
        self._transition(SubmissionState.SUBMITTING)

        try:
            order = await self.placement.place_order(snapshot)
        except OrderPlacementError as e:
            logger.warning(f"Order placement failed for cart {self.cart.cart_id}: {e}")
            self.failure_reason = str(e)
            self._transition(SubmissionState.FAILED)
            return SubmissionResult(state=self.state, failure_reason=self.failure_reason)
        except Exception:
            self.failure_reason = "Unexpected error while placing order"
            self._transition(SubmissionState.FAILED)
            raise

        self.order = order
        self._transition(SubmissionState.SUCCEEDED)

        self.cart.clear()
        self.form_state.reset()

        logger.info(f"Order {order.order_id} placed: {order.currency} {order.total}")
        self.events.dispatch(
            StoreEvent.ORDER_PLACED,
            cart_id=self.cart.cart_id,
            order_id=order.order_id,
            total=order.total,
        )

        return SubmissionResult(
            state=self.state,
            order=order,
            redirect_to=self.redirect_path,
        )

    def _transition(self, new_state: SubmissionState) -> None:
        previous = self.state
        self.state = new_state
        logger.debug(f"Checkout {self.cart.cart_id}: {previous.value} -> {new_state.value}")
        self.events.dispatch(
            StoreEvent.CHECKOUT_STATE_CHANGED,
            cart_id=self.cart.cart_id,
            previous=previous.value,
            state=new_state.value,
            failure_reason=self.failure_reason,
        )
