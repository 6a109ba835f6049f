"""Outbound notifications and the transition result that carries them.

State changes are plain functions `(state, action) -> Transition`. A rejected
action returns the original state unchanged together with a user-facing
reason; callers never get an exception for bad input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, TypeVar, Union

from labubu_store.app.models import CartLine, CheckoutStep, PaymentDetails, ShippingAddress


@dataclass(frozen=True)
class CartUpdated:
    name: ClassVar[str] = "cart-updated"

    lines: Tuple[CartLine, ...]
    subtotal: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lines": [line.model_dump(mode="json") for line in self.lines],
            "subtotal": str(self.subtotal),
            "total": str(self.total),
        }


@dataclass(frozen=True)
class ValidationErrors:
    name: ClassVar[str] = "validation-errors"

    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "errors": dict(self.errors)}


@dataclass(frozen=True)
class StepAdvanced:
    name: ClassVar[str] = "step-advanced"

    step: CheckoutStep

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "step": self.step.value}


@dataclass(frozen=True)
class OrderPlaced:
    name: ClassVar[str] = "order-placed"

    confirmation_id: str
    shipping: ShippingAddress
    payment: PaymentDetails
    shipping_cost: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "confirmation_id": self.confirmation_id,
            "shipping": self.shipping.model_dump(mode="json"),
            "payment": self.payment.summary(),
            "shipping_cost": str(self.shipping_cost),
        }


Event = Union[CartUpdated, ValidationErrors, StepAdvanced, OrderPlaced]

S = TypeVar("S")


@dataclass(frozen=True)
class Transition(Generic[S]):
    state: S
    events: Tuple[Event, ...] = ()
    rejected: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejected is None

    def find(self, event_type: type) -> Optional[Event]:
        return next((e for e in self.events if isinstance(e, event_type)), None)
