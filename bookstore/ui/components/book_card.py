from collections.abc import Callable

import flet as ft

from bookstore.domain.entities import Book
from bookstore.domain.formatting import format_currency
from bookstore.ui.components.card import HoverCard

PLACEHOLDER_COVER = "https://placehold.co/300x400?text=No+Cover"


def cover_image(book: Book, width: float = 160, height: float = 220) -> ft.Control:
    return ft.Image(
        src=book.cover or PLACEHOLDER_COVER,
        width=width,
        height=height,
        fit=ft.ImageFit.COVER,
        border_radius=ft.border_radius.all(8),
        error_content=ft.Icon(ft.Icons.MENU_BOOK, size=48),
    )


def BookCard(
    book: Book,
    on_open: Callable[[Book], None],
    on_add_to_cart: Callable[[Book], None] | None = None,
) -> ft.Control:
    stock_text = (
        ft.Text(f"In stock: {book.quantity}", size=12, color=ft.Colors.GREEN_700)
        if book.in_stock
        else ft.Text("Out of stock", size=12, color=ft.Colors.RED_700)
    )

    actions: list[ft.Control] = []
    if on_add_to_cart:
        actions.append(
            ft.FilledButton(
                "Add to cart",
                icon=ft.Icons.ADD_SHOPPING_CART,
                disabled=not book.in_stock,
                on_click=lambda _: on_add_to_cart(book),
            )
        )

    return HoverCard(
        content=ft.Column(
            [
                ft.Container(
                    content=cover_image(book),
                    alignment=ft.alignment.center,
                    on_click=lambda _: on_open(book),
                ),
                ft.Text(
                    book.title,
                    weight=ft.FontWeight.BOLD,
                    max_lines=2,
                    overflow=ft.TextOverflow.ELLIPSIS,
                ),
                ft.Text(book.author, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(format_currency(book.price), color=ft.Colors.PRIMARY, size=16),
                stock_text,
                *actions,
            ],
            spacing=6,
        ),
        width=220,
    )
