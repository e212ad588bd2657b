"""
Shopping cart reducer.

Pure functions over an immutable list of CartItem. Each mutation returns a
CartChange carrying the next list plus a user-facing message; callers persist
the list and show the message.

Invariants:
- A line's quantity never exceeds the stock recorded on it
- At most one line per book id
- A line with quantity <= 0 never survives an update
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from bookstore.domain.entities import Book, CartItem

MessageLevel = Literal["success", "error", "info"]


@dataclass(frozen=True)
class CartChange:
    items: list[CartItem]
    message: str | None = None
    level: MessageLevel = "info"

    @property
    def ok(self) -> bool:
        return self.level != "error"


@dataclass(frozen=True)
class CartTotals:
    total_items: int
    total_amount: float


def find_item(items: Sequence[CartItem], book_id: str) -> CartItem | None:
    return next((i for i in items if i.id == book_id), None)


def add_item(items: Sequence[CartItem], book: Book, quantity: int) -> CartChange:
    existing = find_item(items, book.id)

    available = book.quantity - (existing.quantity if existing else 0)
    if quantity > available:
        return CartChange(
            list(items),
            f"Sorry, only {book.quantity} copies are available.",
            "error",
        )

    if existing:
        next_items = [
            i.model_copy(update={"quantity": i.quantity + quantity}) if i.id == book.id else i
            for i in items
        ]
    else:
        next_items = [
            *items,
            CartItem(
                id=book.id,
                title=book.title,
                price=book.price,
                image=book.cover,
                quantity=quantity,
                stock=book.quantity,
            ),
        ]

    return CartChange(next_items, f'Added "{book.title}" to your cart.', "success")


def remove_item(items: Sequence[CartItem], book_id: str) -> CartChange:
    next_items = [i for i in items if i.id != book_id]
    return CartChange(next_items, "Item removed from your cart.", "success")


def update_quantity(items: Sequence[CartItem], book_id: str, new_quantity: int) -> CartChange:
    target = find_item(items, book_id)
    if not target:
        return CartChange(list(items))

    if new_quantity <= 0:
        return CartChange([i for i in items if i.id != book_id])

    if new_quantity > target.stock:
        clamped = [
            i.model_copy(update={"quantity": target.stock}) if i.id == book_id else i
            for i in items
        ]
        return CartChange(
            clamped,
            f"Not enough stock. Only {target.stock} copies left.",
            "error",
        )

    return CartChange(
        [i.model_copy(update={"quantity": new_quantity}) if i.id == book_id else i for i in items]
    )


def item_quantity(items: Sequence[CartItem], book_id: str) -> int:
    item = find_item(items, book_id)
    return item.quantity if item else 0


def totals(items: Sequence[CartItem]) -> CartTotals:
    return CartTotals(
        total_items=sum(i.quantity for i in items),
        total_amount=sum(i.price * i.quantity for i in items),
    )
