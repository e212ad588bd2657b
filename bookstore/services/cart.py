import logging

from pydantic import TypeAdapter, ValidationError

from bookstore.domain import cart as cart_rules
from bookstore.domain.cart import CartChange, CartTotals
from bookstore.domain.entities import Book, CartItem
from bookstore.ports.storage import KeyValueStorePort

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart_items"

_CART_ADAPTER = TypeAdapter(list[CartItem])


class CartService:
    """Persists the cart in local storage after every mutation."""

    def __init__(self, storage: KeyValueStorePort, storage_key: str = DEFAULT_CART_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._items = self._load()

    def _load(self) -> list[CartItem]:
        raw = self.storage.get(self.storage_key)
        if raw is None:
            return []
        try:
            items = _CART_ADAPTER.validate_python(raw)
        except ValidationError:
            logger.warning("Discarding unreadable cart from local storage")
            self.storage.remove(self.storage_key)
            return []

        # Backend book ids are numeric
        known = [i for i in items if i.id.isdigit()]
        if len(known) != len(items):
            logger.warning(f"Dropping {len(items) - len(known)} cart line(s) with unknown book ids")
            self.storage.set(self.storage_key, [i.model_dump() for i in known])
        return known

    def _apply(self, change: CartChange) -> CartChange:
        self._items = change.items
        self.storage.set(self.storage_key, [i.model_dump() for i in self._items])
        return change

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def totals(self) -> CartTotals:
        return cart_rules.totals(self._items)

    def item_quantity(self, book_id: str) -> int:
        return cart_rules.item_quantity(self._items, book_id)

    def add(self, book: Book, quantity: int = 1) -> CartChange:
        change = cart_rules.add_item(self._items, book, quantity)
        if not change.ok:
            return change
        return self._apply(change)

    def remove(self, book_id: str) -> CartChange:
        return self._apply(cart_rules.remove_item(self._items, book_id))

    def update_quantity(self, book_id: str, quantity: int) -> CartChange:
        return self._apply(cart_rules.update_quantity(self._items, book_id, quantity))

    def clear(self) -> None:
        self._apply(CartChange([]))
