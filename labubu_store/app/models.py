from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_serializer, field_validator


class Product(BaseModel):
    """A catalog entry. Fixture data, never mutated at runtime."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique product id")
    slug: str = Field(description="Unique human-readable lookup key")
    name: str
    price: Decimal = Field(ge=0, description="Unit price in currency units")
    image_url: Optional[str] = None
    series: Optional[str] = Field(None, description="Collection label used by the listing filter")
    is_new: bool = False
    is_out_of_stock: bool = False

    # Detail page extras
    sku: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()


class CartLine(BaseModel):
    """One product-plus-quantity entry in a cart."""

    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(ge=1)

    @computed_field  # type: ignore[misc]
    @property
    def id(self) -> str:
        # one line per product
        return self.product.id

    @computed_field  # type: ignore[misc]
    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class SortKey(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME_ASC = "name-asc"


class ListingQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    selected_series: frozenset[str] = frozenset()
    sort_key: SortKey = SortKey.NEWEST
    page: int = Field(default=1, ge=1)

    @field_serializer("selected_series")
    def sorted_series(self, value: frozenset[str]) -> list[str]:
        return sorted(value)


class ShippingAddress(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    full_name: str = Field(min_length=2)
    email: EmailStr
    address_line1: str = Field(min_length=5)
    address_line2: Optional[str] = None
    city: str = Field(min_length=2)
    postal_code: str = Field(min_length=4)
    country: str = Field(min_length=1)
    phone_number: Optional[str] = Field(None, min_length=7)

    # optional fields left blank in the form count as not given
    @field_validator("address_line2", "phone_number", mode="before")
    @classmethod
    def blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SameAsShipping(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["same-as-shipping"] = "same-as-shipping"


class BillingAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["separate"] = "separate"
    address_line1: str
    city: str
    postal_code: str
    country: str


Billing = Annotated[Union[SameAsShipping, BillingAddress], Field(discriminator="kind")]


class PaymentDetails(BaseModel):
    """Validated payment step. Built from the flat checkout form."""

    model_config = ConfigDict(frozen=True)

    cardholder_name: str
    card_number: str  # digits only
    expiry_date: str  # MM/YY
    cvc: str
    billing: Billing = SameAsShipping()

    @property
    def billing_same_as_shipping(self) -> bool:
        return isinstance(self.billing, SameAsShipping)

    def summary(self) -> Dict[str, Any]:
        """Non-sensitive view (NO full card number, NO cvc)."""
        return {
            "cardholder_name": self.cardholder_name,
            "card_last4": self.card_number[-4:],
            "expiry_date": self.expiry_date,
            "billing": self.billing.model_dump(mode="json"),
        }


class ShippingMethod(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"


class CheckoutStep(str, Enum):
    SHIPPING_ADDRESS = "shipping-address"
    SHIPPING_METHOD = "shipping-method"
    PAYMENT_DETAILS = "payment-details"


STEP_ORDER = (
    CheckoutStep.SHIPPING_ADDRESS,
    CheckoutStep.SHIPPING_METHOD,
    CheckoutStep.PAYMENT_DETAILS,
)


class CheckoutState(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: CheckoutStep = CheckoutStep.SHIPPING_ADDRESS

    # Last submitted form values, re-exposed when a step is reopened
    shipping_values: Dict[str, Any] = Field(default_factory=dict)
    payment_values: Dict[str, Any] = Field(default_factory=dict)

    shipping_address: Optional[ShippingAddress] = None
    shipping_method: Optional[ShippingMethod] = None
    confirmation_id: Optional[str] = None

    @property
    def placed(self) -> bool:
        return self.confirmation_id is not None

    def unlocked_steps(self) -> Tuple[CheckoutStep, ...]:
        if self.shipping_address is None:
            return STEP_ORDER[:1]
        if self.shipping_method is None:
            return STEP_ORDER[:2]
        return STEP_ORDER
