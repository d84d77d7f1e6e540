# storefront/client/cart.py
"""
Client-held shopping cart.

The state transitions are pure functions over an immutable `CartState`;
`CartStore` wraps them, persists every new state and submits the cart
once at checkout.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.client.storage import LocalStorage
from storefront.core.ids import ids_equal, normalize_id

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "medical-store-cart"


class CartLine(BaseModel):
    """One product in the cart with the display fields captured when added."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    price: float
    image: str | None = None
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartState(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLine, ...] = ()
    total: float = 0.0


def compute_total(lines: tuple[CartLine, ...]) -> float:
    return sum(line.price * line.quantity for line in lines)


def _with_lines(lines: tuple[CartLine, ...]) -> CartState:
    return CartState(lines=lines, total=compute_total(lines))


def _field(product: Any, name: str, default: Any = None) -> Any:
    if isinstance(product, Mapping):
        return product.get(name, default)
    return getattr(product, name, default)


def _snapshot(product: Any) -> CartLine:
    product_id = _field(product, "id")
    if product_id is None:
        product_id = _field(product, "_id")
    image = _field(product, "image")
    if image is None:
        images = _field(product, "images") or []
        image = images[0] if images else None
    return CartLine(
        id=product_id if isinstance(product_id, int) else normalize_id(product_id),
        name=_field(product, "name", ""),
        price=float(_field(product, "price", 0)),
        image=image,
        quantity=1,
    )


def add_item(state: CartState, product: Any) -> CartState:
    """
    Add one unit of `product`.

    An existing line (same id, string-compared) gets quantity + 1 and keeps
    its original snapshot; otherwise a new line is appended.
    """
    incoming = _snapshot(product)
    for index, line in enumerate(state.lines):
        if ids_equal(line.id, incoming.id):
            bumped = line.model_copy(update={"quantity": line.quantity + 1})
            return _with_lines(state.lines[:index] + (bumped,) + state.lines[index + 1:])
    return _with_lines(state.lines + (incoming,))


def remove_item(state: CartState, product_id: Any) -> CartState:
    """Drop the line for `product_id`; absent ids are a no-op."""
    return _with_lines(tuple(line for line in state.lines if not ids_equal(line.id, product_id)))


def update_quantity(state: CartState, product_id: Any, quantity: int) -> CartState:
    """
    Set the quantity of a line.

    Quantities below 1 are rejected: the state is returned unchanged.
    """
    if quantity < 1:
        return state
    return _with_lines(
        tuple(
            line.model_copy(update={"quantity": quantity}) if ids_equal(line.id, product_id) else line
            for line in state.lines
        )
    )


def clear() -> CartState:
    return CartState()


class CartStore:
    """
    Persistent cart bound to a `LocalStorage`.

    The whole state is written after every mutation and restored on
    construction. Nothing reaches the server until `checkout`.
    """

    def __init__(self, storage: LocalStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.state = self._restore()

    def _restore(self) -> CartState:
        raw = self.storage.get(self.key)
        if not raw:
            return CartState()
        try:
            lines = tuple(CartLine.model_validate(item) for item in raw.get("items", []))
        except (ValueError, AttributeError):
            logger.warning("Discarding unreadable cart in storage")
            return CartState()
        # Totals are always recomputed, never trusted from storage.
        return _with_lines(lines)

    def _commit(self, state: CartState) -> CartState:
        self.state = state
        self.storage.set(
            self.key,
            {
                "items": [line.model_dump() for line in state.lines],
                "total": state.total,
            },
        )
        return state

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return self.state.lines

    @property
    def total(self) -> float:
        return self.state.total

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.state.lines)

    def quantity_of(self, product_id: Any) -> int:
        for line in self.state.lines:
            if ids_equal(line.id, product_id):
                return line.quantity
        return 0

    def add_item(self, product: Any) -> CartState:
        return self._commit(add_item(self.state, product))

    def remove_item(self, product_id: Any) -> CartState:
        return self._commit(remove_item(self.state, product_id))

    def update_quantity(self, product_id: Any, quantity: int) -> CartState:
        return self._commit(update_quantity(self.state, product_id, quantity))

    def clear(self) -> CartState:
        return self._commit(clear())

    def checkout(self, api, delivery_info: dict) -> dict:
        """
        Submit the cart as one order.

        The cart is cleared only after the server accepted the order; on
        failure the `ApiError` propagates and the cart is left for a retry.
        """
        if not self.state.lines:
            raise ValueError("Cart is empty")

        items = [
            {
                "product_id": normalize_id(line.id),
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "image": line.image,
            }
            for line in self.state.lines
        ]
        order = api.create_order(items, delivery_info)
        self.clear()
        logger.info("Checkout complete, order %s", order.get("id") if order else None)
        return order
