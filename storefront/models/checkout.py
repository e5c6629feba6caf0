"""Checkout models for the storefront"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from enum import Enum

from .line_item import LineItem


class PaymentMethod(str, Enum):
    COD = "cod"
    UPI = "upi"


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PLACED = "placed"


class CheckoutForm(BaseModel):
    """Purchaser contact, shipping and payment details"""
    model_config = ConfigDict(validate_assignment=True)

    full_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    zip_code: str = ""
    payment_method: PaymentMethod = PaymentMethod.COD
    upi_id: Optional[str] = None


class PurchaserProfile(BaseModel):
    """Known purchaser details used to prefill the checkout form"""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    zip_code: Optional[str] = None


class SummaryItem(BaseModel):
    id: str
    name: str
    price: Decimal
    quantity: int
    attributes: Optional[dict[str, str]] = None


class OrderSummary(BaseModel):
    """Priced view of the cart including shipping"""
    items: list[SummaryItem] = []
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    amount_to_free_shipping: Decimal
    currency: str = "INR"


class OrderSnapshot(BaseModel):
    """Frozen copy of cart and form handed to order placement"""
    items: list[LineItem]
    total: Decimal
    shipping: Decimal
    grand_total: Decimal
    currency: str = "INR"
    form: CheckoutForm


class OrderItem(BaseModel):
    """Item in an order"""
    product_id: str
    variant_id: Optional[str] = None
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class Order(BaseModel):
    """Placed order"""
    order_id: str
    status: OrderStatus
    items: list[OrderItem]
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    currency: str = "INR"
    customer: CheckoutForm
    payment_method: PaymentMethod
    created_at: datetime
    updated_at: datetime


class CheckoutFormUpdate(BaseModel):
    """Partial form edit; only provided fields are applied"""
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    zip_code: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    upi_id: Optional[str] = None


class BeginCheckoutRequest(BaseModel):
    """Start checkout, optionally with a known purchaser profile"""
    profile: Optional[PurchaserProfile] = None


class CheckoutStateResponse(BaseModel):
    """Current checkout form and submission state"""
    form: CheckoutForm
    errors: dict[str, str] = {}
    state: SubmissionState
    can_submit: bool
    failure_reason: Optional[str] = None


class SubmissionResponse(BaseModel):
    """Outcome of a submit attempt"""
    success: bool
    state: SubmissionState
    errors: dict[str, str] = {}
    order: Optional[Order] = None
    failure_reason: Optional[str] = None
    redirect_to: Optional[str] = None
