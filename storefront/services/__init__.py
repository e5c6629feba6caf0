# Cart and checkout services

from .cart_store import CartStore
from .checkout_form import CheckoutFormState, validate_checkout_form
from .shipping import ShippingPolicy
from .order_placement import (
    OrderPlacement,
    OrderPlacementError,
    SimulatedOrderPlacement,
    HttpOrderPlacement,
)
from .order_pipeline import (
    OrderSubmission,
    SubmissionResult,
    CheckoutError,
    SubmissionInProgressError,
    SubmissionClosedError,
    EmptyCartError,
)

__all__ = [
    "CartStore",
    "CheckoutFormState",
    "validate_checkout_form",
    "ShippingPolicy",
    "OrderPlacement",
    "OrderPlacementError",
    "SimulatedOrderPlacement",
    "HttpOrderPlacement",
    "OrderSubmission",
    "SubmissionResult",
    "CheckoutError",
    "SubmissionInProgressError",
    "SubmissionClosedError",
    "EmptyCartError",
]
