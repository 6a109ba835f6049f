from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint

from labubu_store.app.models import CheckoutState
from labubu_store.app.common.errors import abort_conflict, abort_validation
from labubu_store.app.common.events import OrderPlaced, Transition, ValidationErrors
from labubu_store.app.common.validation import get_json, require_fields
from labubu_store.modules.cart.routes import cart_response
from labubu_store.modules.cart.session import load_cart
from labubu_store.modules.cart.state import Cart
from labubu_store.modules.checkout.flow import reopen, select_shipping_method, submit_payment, submit_shipping
from labubu_store.modules.checkout.session import load_checkout, reset_checkout, save_checkout, shipping_rate

bp = Blueprint("checkout", __name__)


def _checkout_response(state: CheckoutState, events=()) -> Dict[str, Any]:
    cart = load_cart(shipping_rate(state))
    return {
        "checkout": {
            "step": state.step.value,
            "unlocked_steps": [s.value for s in state.unlocked_steps()],
            "shipping_values": state.shipping_values,
            "shipping_method": state.shipping_method.value if state.shipping_method else None,
            "payment_values": state.payment_values,
            "confirmation_id": state.confirmation_id,
        },
        "summary": _order_summary(cart),
        "events": [e.to_dict() for e in events],
    }


def _order_summary(cart: Cart) -> Dict[str, Any]:
    return {
        "items": cart_response(cart)["items"],
        **cart.summary(),
    }


def _commit(transition: Transition[CheckoutState], status: int = 200):
    # retained form values are saved even when the step is rejected
    save_checkout(transition.state)
    if transition.rejected:
        invalid = transition.find(ValidationErrors)
        if invalid is not None:
            abort_validation(invalid.errors, transition.rejected, step=transition.state.step.value)
        abort_conflict(transition.rejected, step=transition.state.step.value)
    return _checkout_response(transition.state, transition.events), status


@bp.get("/checkout")
def get_checkout():
    return _checkout_response(load_checkout()), 200


@bp.post("/checkout/shipping-address")
def post_shipping_address():
    return _commit(submit_shipping(load_checkout(), get_json()))


@bp.post("/checkout/shipping-method")
def post_shipping_method():
    data = get_json()
    require_fields(data, ["method"])
    return _commit(select_shipping_method(load_checkout(), str(data["method"])))


@bp.post("/checkout/payment")
def post_payment():
    """Checkout: validate payment, then confirm the order.

    Nothing is charged and nothing is stored; the confirmation only exists in
    the response and the session.
    """
    data = get_json()
    state = load_checkout()
    cart = load_cart(shipping_rate(state))
    if not cart.lines:
        abort_conflict("Cart is empty")

    transition = submit_payment(state, data, cart.shipping_cost())
    body, status = _commit(transition, 201)
    placed = transition.find(OrderPlaced)
    body["order"] = {**placed.to_dict(), "summary": _order_summary(cart)}
    return body, status


@bp.post("/checkout/step")
def post_step():
    """Reopen an already unlocked step; its last submitted values come back."""
    data = get_json()
    require_fields(data, ["step"])
    return _commit(reopen(load_checkout(), str(data["step"])))


@bp.delete("/checkout")
def delete_checkout():
    reset_checkout()
    return _checkout_response(CheckoutState()), 200
