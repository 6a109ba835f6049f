"""Linear checkout: shipping-address -> shipping-method -> payment-details.

Each function takes the current `CheckoutState` and one user action and
returns a `Transition`. The step only moves forward when the active step
validates; reopening an earlier step keeps whatever was last submitted there.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Any, Callable, Mapping

from labubu_store.app.common.events import OrderPlaced, StepAdvanced, Transition, ValidationErrors
from labubu_store.app.models import CheckoutState, CheckoutStep, ShippingMethod
from labubu_store.modules.checkout.forms import (
    PAYMENT_FIELDS,
    SENSITIVE_PAYMENT_FIELDS,
    SHIPPING_FIELDS,
    pick,
    validate_payment,
    validate_shipping,
)

logger = logging.getLogger(__name__)

INVALID_FORM = "Please correct the highlighted fields."
ALREADY_PLACED = "Order already placed"


def new_confirmation_id() -> str:
    return f"LB{uuid.uuid4().hex[:8].upper()}"


def _not_active(step: CheckoutStep) -> str:
    return f"Step {step.value} is not active"


def _retained(values: Mapping[str, Any], fields, drop=()) -> dict:
    return {k: v for k, v in pick(values, fields).items() if k not in drop}


def submit_shipping(state: CheckoutState, values: Mapping[str, Any]) -> Transition[CheckoutState]:
    if state.placed:
        return Transition(state, rejected=ALREADY_PLACED)
    if state.step is not CheckoutStep.SHIPPING_ADDRESS:
        return Transition(state, rejected=_not_active(CheckoutStep.SHIPPING_ADDRESS))

    address, errors = validate_shipping(values)
    retained = _retained(values, SHIPPING_FIELDS)
    if errors:
        # an invalid resubmission locks the later steps again
        failed = state.model_copy(update={"shipping_values": retained, "shipping_address": None})
        return Transition(failed, (ValidationErrors(errors),), rejected=INVALID_FORM)

    advanced = state.model_copy(
        update={
            "shipping_values": retained,
            "shipping_address": address,
            "step": CheckoutStep.SHIPPING_METHOD,
        }
    )
    return Transition(advanced, (StepAdvanced(CheckoutStep.SHIPPING_METHOD),))


def select_shipping_method(state: CheckoutState, method: str) -> Transition[CheckoutState]:
    if state.placed:
        return Transition(state, rejected=ALREADY_PLACED)
    if state.step is not CheckoutStep.SHIPPING_METHOD or state.shipping_address is None:
        return Transition(state, rejected=_not_active(CheckoutStep.SHIPPING_METHOD))

    try:
        chosen = ShippingMethod(method)
    except ValueError:
        errors = {"method": "Please select a shipping method."}
        return Transition(state, (ValidationErrors(errors),), rejected=INVALID_FORM)

    advanced = state.model_copy(update={"shipping_method": chosen, "step": CheckoutStep.PAYMENT_DETAILS})
    return Transition(advanced, (StepAdvanced(CheckoutStep.PAYMENT_DETAILS),))


def submit_payment(
    state: CheckoutState,
    values: Mapping[str, Any],
    shipping_cost: Decimal,
    make_confirmation_id: Callable[[], str] = new_confirmation_id,
) -> Transition[CheckoutState]:
    if state.placed:
        return Transition(state, rejected=ALREADY_PLACED)
    if state.step is not CheckoutStep.PAYMENT_DETAILS or state.shipping_address is None:
        return Transition(state, rejected=_not_active(CheckoutStep.PAYMENT_DETAILS))

    payment, errors = validate_payment(values)
    retained = _retained(values, PAYMENT_FIELDS, drop=SENSITIVE_PAYMENT_FIELDS)
    if errors:
        failed = state.model_copy(update={"payment_values": retained})
        return Transition(failed, (ValidationErrors(errors),), rejected=INVALID_FORM)

    confirmation_id = make_confirmation_id()
    placed = state.model_copy(update={"payment_values": retained, "confirmation_id": confirmation_id})
    logger.info("Order %s placed (shipping %s)", confirmation_id, shipping_cost)
    return Transition(
        placed,
        (
            OrderPlaced(
                confirmation_id=confirmation_id,
                shipping=state.shipping_address,
                payment=payment,
                shipping_cost=shipping_cost,
            ),
        ),
    )


def reopen(state: CheckoutState, step: str) -> Transition[CheckoutState]:
    """Go back to (or return to) a step that has already been unlocked."""
    if state.placed:
        return Transition(state, rejected=ALREADY_PLACED)
    try:
        target = CheckoutStep(step)
    except ValueError:
        return Transition(state, rejected=f"Unknown checkout step: {step}")
    if target not in state.unlocked_steps():
        return Transition(state, rejected=f"Step {target.value} is not available yet")
    return Transition(state.model_copy(update={"step": target}))
