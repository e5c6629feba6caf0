"""Checkout form state and validation"""

import re
from typing import Any, Optional

from ..models.checkout import CheckoutForm, PaymentMethod, PurchaserProfile

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9]{10}$")
WHITESPACE_RE = re.compile(r"\s")

REQUIRED_FIELDS = {
    "full_name": "Full name is required",
    "phone": "Phone number is required",
    "email": "Email is required",
    "address": "Address is required",
    "zip_code": "ZIP code is required",
}

PREFILL_FIELDS = ("full_name", "phone", "email", "address", "zip_code")


def validate_checkout_form(form: CheckoutForm) -> dict[str, str]:
    """
    Check every rule and collect all violations.

    Returns:
        Mapping of field name to message; empty when the form is valid
    """
    errors: dict[str, str] = {}

    for field, message in REQUIRED_FIELDS.items():
        if not getattr(form, field).strip():
            errors[field] = message

    if form.payment_method == PaymentMethod.UPI and not (form.upi_id or "").strip():
        errors["upi_id"] = "UPI ID is required"

    if "email" not in errors and not EMAIL_RE.match(form.email.strip()):
        errors["email"] = "Please enter a valid email"

    if "phone" not in errors and not PHONE_RE.match(WHITESPACE_RE.sub("", form.phone)):
        errors["phone"] = "Please enter a valid 10-digit phone number"

    return errors


class CheckoutFormState:
    """Purchaser-entered fields plus their current errors"""

    def __init__(self, profile: Optional[PurchaserProfile] = None):
        self.form = CheckoutForm()
        self.errors: dict[str, str] = {}
        self._touched: set[str] = set()
        if profile:
            self.apply_prefill(profile)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def set_field(self, name: str, value: Any) -> None:
        """
        Apply a user edit and clear that field's error.

        None puts the field back to its blank default. Values of the wrong
        type raise pydantic's ValidationError.
        """
        if name not in CheckoutForm.model_fields:
            raise ValueError(f"Unknown checkout field: {name}")

        if value is None:
            value = CheckoutForm.model_fields[name].default

        setattr(self.form, name, value)
        self._touched.add(name)
        self.errors.pop(name, None)

    def update(self, **fields: Any) -> None:
        for name, value in fields.items():
            self.set_field(name, value)

    def apply_prefill(self, profile: PurchaserProfile) -> None:
        """Fill defaults from a known profile without overriding user edits"""
        for name in PREFILL_FIELDS:
            value = getattr(profile, name)
            if value is None or name in self._touched:
                continue
            setattr(self.form, name, value)

    def validate(self) -> bool:
        self.errors = validate_checkout_form(self.form)
        return self.is_valid

    def reset(self) -> None:
        self.form = CheckoutForm()
        self.errors = {}
        self._touched.clear()
