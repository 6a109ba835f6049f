from __future__ import annotations

import logging
from decimal import Decimal

from flask import current_app, session
from pydantic import ValidationError

from labubu_store.app.models import CheckoutState, ShippingMethod

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_KEY = "checkout"


def load_checkout() -> CheckoutState:
    try:
        return CheckoutState.model_validate(session.get(CHECKOUT_SESSION_KEY) or {})
    except ValidationError:
        logger.warning("Discarding unreadable checkout state")
        return CheckoutState()


def save_checkout(state: CheckoutState) -> None:
    session[CHECKOUT_SESSION_KEY] = state.model_dump(mode="json")


def reset_checkout() -> None:
    session.pop(CHECKOUT_SESSION_KEY, None)


def method_rate(method: ShippingMethod) -> Decimal:
    if method is ShippingMethod.EXPRESS:
        return current_app.config["EXPRESS_SHIPPING"]
    return current_app.config["STANDARD_SHIPPING"]


def shipping_rate(state: CheckoutState) -> Decimal:
    """Rate of the chosen method, or the flat rate until one is chosen."""
    if state.shipping_method is None:
        return current_app.config["FLAT_SHIPPING"]
    return method_rate(state.shipping_method)
