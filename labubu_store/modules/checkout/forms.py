"""Checkout form schemas and their field messages."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from labubu_store.app.common.validation import validate_form
from labubu_store.app.models import BillingAddress, PaymentDetails, SameAsShipping, ShippingAddress

SHIPPING_FIELDS = (
    "full_name",
    "email",
    "address_line1",
    "address_line2",
    "city",
    "postal_code",
    "country",
    "phone_number",
)

SHIPPING_MESSAGES = {
    "full_name": "Full name must be at least 2 characters.",
    "email": "Please enter a valid email address.",
    "address_line1": "Address is too short.",
    "city": "City name is too short.",
    "postal_code": "Postal code is too short.",
    "country": "Please select a country.",
    "phone_number": "Phone number is too short.",
}

PAYMENT_FIELDS = (
    "cardholder_name",
    "card_number",
    "expiry_date",
    "cvc",
    "billing_same_as_shipping",
    "billing_address_line1",
    "billing_city",
    "billing_postal_code",
    "billing_country",
)

# Never kept in the session for re-display
SENSITIVE_PAYMENT_FIELDS = ("card_number", "cvc")

PAYMENT_MESSAGES = {
    "cardholder_name": "Cardholder name is too short.",
    "card_number": "Invalid card number format.",
    "expiry_date": "Expiry date must be MM/YY.",
    "cvc": "CVC must be 3 or 4 digits.",
    "billing_same_as_shipping": "Please choose whether billing matches shipping.",
}

BILLING_REQUIRED_MESSAGE = "Billing address details are required if different from shipping."

BILLING_FIELDS = ("billing_address_line1", "billing_city", "billing_postal_code", "billing_country")


class PaymentForm(BaseModel):
    """Flat payment form as posted by the client."""

    model_config = ConfigDict(str_strip_whitespace=True)

    cardholder_name: str = Field(min_length=2)
    card_number: str = Field(pattern=r"^[0-9]{13,19}$")
    expiry_date: str = Field(pattern=r"^(0[1-9]|1[0-2])/[0-9]{2}$")
    cvc: str = Field(pattern=r"^[0-9]{3,4}$")
    billing_same_as_shipping: bool = True
    billing_address_line1: Optional[str] = None
    billing_city: Optional[str] = None
    billing_postal_code: Optional[str] = None
    billing_country: Optional[str] = None

    @field_validator("card_number", mode="before")
    @classmethod
    def strip_spaces(cls, value: Any) -> Any:
        if isinstance(value, str):
            return re.sub(r"\s", "", value)
        return value

    @model_validator(mode="after")
    def billing_required_when_separate(self) -> "PaymentForm":
        # only runs once every field is valid, so the flag is already a bool
        if not self.billing_same_as_shipping and any(not getattr(self, f) for f in BILLING_FIELDS):
            raise PydanticCustomError("billing_required", BILLING_REQUIRED_MESSAGE)
        return self

    def to_details(self) -> PaymentDetails:
        if self.billing_same_as_shipping:
            billing = SameAsShipping()
        else:
            billing = BillingAddress(
                address_line1=self.billing_address_line1,
                city=self.billing_city,
                postal_code=self.billing_postal_code,
                country=self.billing_country,
            )
        return PaymentDetails(
            cardholder_name=self.cardholder_name,
            card_number=self.card_number,
            expiry_date=self.expiry_date,
            cvc=self.cvc,
            billing=billing,
        )


def pick(values: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    return {f: values[f] for f in fields if f in values}


def validate_shipping(values: Mapping[str, Any]) -> Tuple[Optional[ShippingAddress], Dict[str, str]]:
    return validate_form(ShippingAddress, pick(values, SHIPPING_FIELDS), SHIPPING_MESSAGES)


def validate_payment(values: Mapping[str, Any]) -> Tuple[Optional[PaymentDetails], Dict[str, str]]:
    # the billing rule is form-level; it is reported on the first billing field
    form, errors = validate_form(
        PaymentForm,
        pick(values, PAYMENT_FIELDS),
        PAYMENT_MESSAGES,
        form_field="billing_address_line1",
    )
    if errors:
        return None, errors
    return form.to_details(), {}
