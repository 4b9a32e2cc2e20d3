"""
cart.py — Shopping Cart

An ordered collection of line items with merge-on-add semantics: at most one
line item exists per product id, and adding an already-present product increases
its quantity instead of creating a duplicate entry.
"""

from typing import Dict, List

from .errors import InvalidArgumentError
from .models import CartItem, Product


class Cart:
    """
    Owns its line items exclusively. Items are stored as frozen `CartItem`
    snapshots keyed by product id, in order of first add.
    """

    def __init__(self):
        self._items: Dict[str, CartItem] = {}

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """
        Adds `quantity` units of `product` to the cart.

        Raises:
            InvalidArgumentError: If quantity is zero or negative. The cart is left unchanged.
        """
        if quantity <= 0:
            raise InvalidArgumentError(f"Quantity must be > 0 (got {quantity})")

        existing = self._items.get(product.id)
        if existing is not None:
            # Replacing keeps the dict position, i.e. the first-add order
            self._items[product.id] = CartItem(
                product=existing.product, quantity=existing.quantity + quantity
            )
        else:
            self._items[product.id] = CartItem(product=product, quantity=quantity)

    def remove_item(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def get_items(self) -> List[CartItem]:
        """Returns a new list of line item snapshots; never the internal storage."""
        return list(self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self):
        return len(self._items)
