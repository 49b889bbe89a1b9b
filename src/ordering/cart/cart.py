"""Cart Store: the session's cart, persisted per identity.

The store owns the in-memory lines for the active identity and writes them
through to ``CartStorage`` after every mutation. Writes are fire-and-forget:
a failed write is logged and the mutation still stands. Totals are always
derived from the lines, never stored.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

import structlog

from identity.credentials import Identity
from ordering.cart.line import CartLine
from ordering.cart.storage import CartStorage, decode_lines, encode_lines

logger = structlog.get_logger(__name__)


def _product_fields(product: Any) -> tuple[Any, str, Decimal]:
    if isinstance(product, CartLine):
        return product.product_id, product.name, product.unit_price
    if isinstance(product, Mapping):
        return product["id"], product["name"], Decimal(str(product["price"]))
    return product.id, product.name, Decimal(str(product.price))


class CartStore:
    def __init__(self, storage: CartStorage, identity: Identity | None = None) -> None:
        self._storage = storage
        self._identity = identity or Identity.anonymous()
        self._lines: dict[Any, CartLine] = self._load()

    # -------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------
    @property
    def identity(self) -> Identity:
        return self._identity

    def switch_identity(self, identity: Identity) -> None:
        """Swap to another identity's cart. The current cart stays stored under its own key."""
        if identity.storage_key == self._identity.storage_key:
            self._identity = identity
            return

        previous = self._identity.storage_key
        self._identity = identity
        self._lines = self._load()
        logger.info(
            "Switched cart identity",
            from_key=previous,
            to_key=identity.storage_key,
            line_count=len(self._lines),
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, product_id: Any) -> CartLine | None:
        return self._lines.get(product_id)

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def total_amount(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product: Any, qty: int = 1) -> CartLine:
        """Add ``qty`` of a product, accumulating onto an existing line."""
        if qty < 1:
            raise ValueError(f"qty must be at least 1, got {qty}")

        product_id, name, price = _product_fields(product)
        lines = dict(self._lines)
        existing = lines.get(product_id)
        if existing:
            line = existing.with_quantity(existing.quantity + qty)
        else:
            line = CartLine(product_id=product_id, name=name, unit_price=price, quantity=qty)
        lines[product_id] = line

        self._commit(lines)
        logger.debug("Cart item added", product_id=product_id, quantity=line.quantity)
        return line

    def set_quantity(self, product_id: Any, qty: int) -> None:
        """Set a line's quantity; zero or less removes it. Unknown ids are ignored."""
        existing = self._lines.get(product_id)
        if existing is None:
            return
        if qty <= 0:
            self.remove_item(product_id)
            return

        lines = dict(self._lines)
        lines[product_id] = existing.with_quantity(qty)
        self._commit(lines)

    def remove_item(self, product_id: Any) -> None:
        if product_id not in self._lines:
            return
        lines = {pid: line for pid, line in self._lines.items() if pid != product_id}
        self._commit(lines)
        logger.debug("Cart item removed", product_id=product_id)

    def clear(self) -> None:
        self._commit({})
        logger.info("Cart cleared", storage_key=self._identity.storage_key)

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _commit(self, lines: dict[Any, CartLine]) -> None:
        # Swap the whole mapping so readers never see a partial update
        self._lines = lines
        self._persist()

    def _load(self) -> dict[Any, CartLine]:
        key = self._identity.storage_key
        try:
            lines = decode_lines(self._storage.read(key))
        except Exception as exc:
            logger.warning("Cart storage read failed, starting empty", storage_key=key, error=str(exc))
            return {}
        return {line.product_id: line for line in lines}

    def _persist(self) -> None:
        key = self._identity.storage_key
        try:
            self._storage.write(key, encode_lines(self.lines))
        except Exception as exc:
            logger.warning("Cart storage write failed", storage_key=key, error=str(exc))
