from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Blueprint

from labubu_store.app.extensions import catalog
from labubu_store.app.common.errors import (
    INVALID_QUANTITY,
    VALIDATION_ERROR,
    abort_conflict,
    abort_json,
    abort_not_found,
)
from labubu_store.app.common.events import Transition
from labubu_store.app.common.validation import get_int, get_json, require_fields
from labubu_store.modules.cart.session import load_cart, save_cart
from labubu_store.modules.cart.state import Cart
from labubu_store.modules.checkout.session import load_checkout, shipping_rate

bp = Blueprint("cart", __name__)

logger = logging.getLogger(__name__)


def _get_cart() -> Cart:
    return load_cart(shipping_rate(load_checkout()))


def cart_response(cart: Cart, events=()) -> Dict[str, Any]:
    return {
        "items": [
            {
                "id": line.id,
                "product_id": line.product.id,
                "slug": line.product.slug,
                "name": line.product.name,
                "image_url": line.product.image_url,
                "price": line.product.price,
                "quantity": line.quantity,
                "line_total": line.line_total,
            }
            for line in cart.lines
        ],
        "summary": cart.summary(),
        "events": [e.to_dict() for e in events],
    }


def _commit(transition: Transition[Cart], status: int = 200):
    if transition.rejected:
        abort_json(400, INVALID_QUANTITY, transition.rejected)
    save_cart(transition.state)
    return cart_response(transition.state, transition.events), status


@bp.get("/cart")
def get_cart():
    return cart_response(_get_cart()), 200


@bp.post("/cart/items")
def add_to_cart():
    """POST /api/cart/items - Add a product (by id or slug)."""
    data = get_json()
    key = data.get("product_id") or data.get("slug")
    if not key:
        abort_json(400, VALIDATION_ERROR, "Product ID required", {"missing": ["product_id"]})

    qty = get_int(data, "quantity", 1)
    if qty < 1:
        abort_json(400, INVALID_QUANTITY, "Quantity must be at least 1")

    product = catalog.repository.get(str(key))
    if not product:
        abort_not_found("Product not found")
    if product.is_out_of_stock:
        abort_conflict("Out of stock", product_id=product.id)

    logger.info("Adding %d x %s to cart", qty, product.slug)
    return _commit(_get_cart().add_item(product, qty), 201)


@bp.put("/cart/items/<line_id>")
def update_cart_item(line_id: str):
    """Replace the quantity of a line. Quantities below 1 are ignored."""
    data = get_json()
    require_fields(data, ["quantity"])
    qty = get_int(data, "quantity")

    cart = _get_cart()
    if cart.find(line_id) is None:
        abort_not_found("Cart item not found")
    return _commit(cart.set_quantity(line_id, qty))


@bp.patch("/cart/items/<line_id>")
def partial_update_cart_item(line_id: str):
    data = get_json()
    cart = _get_cart()
    if cart.find(line_id) is None:
        abort_not_found("Cart item not found")

    if "quantity" not in data:
        return cart_response(cart), 200
    return _commit(cart.set_quantity(line_id, get_int(data, "quantity")))


@bp.delete("/cart/items/<line_id>")
def delete_cart_item(line_id: str):
    transition = _get_cart().remove_item(line_id)
    if not transition.events:
        return {"message": "no_op"}, 204
    return _commit(transition)


@bp.delete("/cart")
def clear_cart():
    return _commit(_get_cart().clear())
