from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from labubu_store.app.common.events import CartUpdated, Transition
from labubu_store.app.models import CartLine, Product

FLAT_SHIPPING = Decimal("5.00")
ZERO = Decimal("0.00")


class Cart(BaseModel):
    """In-memory cart. Every operation returns a new cart inside a Transition.

    `shipping_rate` is the policy rate applied to a non-empty cart: the flat
    rate by default, or the rate of the shipping method picked at checkout.
    """

    model_config = ConfigDict(frozen=True)

    lines: Tuple[CartLine, ...] = ()
    shipping_rate: Decimal = FLAT_SHIPPING

    def find(self, line_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.id == line_id), None)

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), ZERO)

    def shipping_cost(self) -> Decimal:
        return self.shipping_rate if self.lines else ZERO

    def total(self) -> Decimal:
        return self.subtotal() + self.shipping_cost()

    def summary(self) -> Dict[str, Any]:
        return {
            "item_count": self.item_count(),
            "subtotal": self.subtotal(),
            "shipping": self.shipping_cost(),
            "total": self.total(),
        }

    # --- operations ---

    def add_item(self, product: Product, quantity: int = 1) -> Transition[Cart]:
        if quantity < 1:
            return Transition(self, rejected="Quantity must be at least 1")

        existing = self.find(product.id)
        if existing is None:
            return self._changed(self.lines + (CartLine(product=product, quantity=quantity),))
        return self._changed(self._replace(existing, existing.quantity + quantity))

    def set_quantity(self, line_id: str, new_quantity: int) -> Transition[Cart]:
        line = self.find(line_id)
        if line is None:
            return Transition(self, rejected="Cart item not found")
        # below 1 is ignored; removal is its own operation
        if new_quantity < 1:
            return Transition(self, rejected="Quantity must be at least 1")
        return self._changed(self._replace(line, new_quantity))

    def remove_item(self, line_id: str) -> Transition[Cart]:
        if self.find(line_id) is None:
            return Transition(self)
        return self._changed(tuple(line for line in self.lines if line.id != line_id))

    def clear(self) -> Transition[Cart]:
        if not self.lines:
            return Transition(self)
        return self._changed(())

    def _replace(self, line: CartLine, quantity: int) -> Tuple[CartLine, ...]:
        updated = CartLine(product=line.product, quantity=quantity)
        return tuple(updated if l.id == line.id else l for l in self.lines)

    def _changed(self, lines: Tuple[CartLine, ...]) -> Transition[Cart]:
        cart = self.model_copy(update={"lines": lines})
        return Transition(cart, (CartUpdated(lines=cart.lines, subtotal=cart.subtotal(), total=cart.total()),))
