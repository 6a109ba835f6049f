"""Cart <-> Flask session.

Only product ids and quantities go into the cookie; products are resolved
against the catalog on every read so prices always come from the fixtures.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from flask import session

from labubu_store.app.extensions import catalog
from labubu_store.app.models import CartLine
from labubu_store.modules.cart.state import Cart

logger = logging.getLogger(__name__)

CART_SESSION_KEY = "cart"


def load_cart(shipping_rate: Decimal) -> Cart:
    lines = []
    for raw in session.get(CART_SESSION_KEY) or []:
        product = catalog.repository.get(str(raw.get("product_id")))
        if product is None:
            logger.warning("Dropping cart line for unknown product %s", raw.get("product_id"))
            continue
        lines.append(CartLine(product=product, quantity=int(raw["quantity"])))
    return Cart(lines=tuple(lines), shipping_rate=shipping_rate)


def save_cart(cart: Cart) -> None:
    session[CART_SESSION_KEY] = [{"product_id": line.product.id, "quantity": line.quantity} for line in cart.lines]
