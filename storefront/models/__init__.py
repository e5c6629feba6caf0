# Storefront Models

from .product import Product, ProductCategory, Variant, ProductSearchResponse, CatalogHashResponse
from .line_item import LineItem, make_line_item_id, to_money
from .checkout import (
    CheckoutForm,
    CheckoutFormUpdate,
    PurchaserProfile,
    PaymentMethod,
    SubmissionState,
    OrderStatus,
    OrderSummary,
    SummaryItem,
    OrderSnapshot,
    OrderItem,
    Order,
    BeginCheckoutRequest,
    CheckoutStateResponse,
    SubmissionResponse,
)
from .cart import (
    CartState,
    AddToCartRequest,
    UpdateQuantityRequest,
    ValidateHashRequest,
    CartResponse,
)

__all__ = [
    "Product",
    "ProductCategory",
    "Variant",
    "ProductSearchResponse",
    "CatalogHashResponse",
    "LineItem",
    "make_line_item_id",
    "to_money",
    "CheckoutForm",
    "CheckoutFormUpdate",
    "PurchaserProfile",
    "PaymentMethod",
    "SubmissionState",
    "OrderStatus",
    "OrderSummary",
    "SummaryItem",
    "OrderSnapshot",
    "OrderItem",
    "Order",
    "BeginCheckoutRequest",
    "CheckoutStateResponse",
    "SubmissionResponse",
    "CartState",
    "AddToCartRequest",
    "UpdateQuantityRequest",
    "ValidateHashRequest",
    "CartResponse",
]
