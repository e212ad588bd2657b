import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.app_shell.cart_page import add_to_cart
from bookstore.domain.entities import Book, Category
from bookstore.ui.components.book_card import BookCard
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def _book_row(page: ft.Page, ctx: ServiceContext, state: AppState, books: list[Book]) -> ft.Control:
    if not books:
        return ft.Text("No books to show yet.", color=ft.Colors.ON_SURFACE_VARIANT)
    return ft.Row(
        [
            BookCard(
                b,
                on_open=lambda book: page.go(f"/books/{book.id}"),
                on_add_to_cart=lambda book: add_to_cart(page, ctx, state, book),
            )
            for b in books
        ],
        wrap=True,
        spacing=16,
        run_spacing=16,
    )


def PublicHomeContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    home = ctx.rules.home
    latest: list[Book] = []
    bestsellers: list[Book] = []
    categories: list[Category] = []

    try:
        latest = ctx.books.latest(home.latest_limit)
        bestsellers = ctx.books.bestsellers(home.bestsellers_limit)
        categories = ctx.categories.list_all()
    except ApiError as e:
        logger.error(f"Failed to load home page: {e}")
        show_toast(page, str(e), "error")

    hero = ft.Container(
        content=ft.Column(
            [
                ft.Text(ctx.rules.app.title, size=36, weight=ft.FontWeight.BOLD, color=ft.Colors.ON_PRIMARY),
                ft.Text("Find your next favourite book.", size=16, color=ft.Colors.ON_PRIMARY),
                ft.FilledTonalButton("Browse the catalogue", on_click=lambda _: page.go("/books")),
            ],
            spacing=10,
        ),
        bgcolor=ft.Colors.PRIMARY,
        padding=30,
        border_radius=12,
    )

    category_chips = ft.Row(
        [
            ft.OutlinedButton(c.name, on_click=lambda _, cid=c.id: page.go(f"/books?category={cid}"))
            for c in categories
        ],
        wrap=True,
    )

    return ft.Column(
        [
            hero,
            ft.Text("New arrivals", size=22, weight=ft.FontWeight.BOLD),
            _book_row(page, ctx, state, latest),
            ft.Text("Best sellers", size=22, weight=ft.FontWeight.BOLD),
            _book_row(page, ctx, state, bestsellers),
            ft.Text("Categories", size=22, weight=ft.FontWeight.BOLD),
            category_chips,
        ],
        spacing=16,
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )


def NotFoundContent(page: ft.Page, route: str) -> ft.Control:
    return ft.Column(
        [
            ft.Text("404", size=64, weight=ft.FontWeight.BOLD, color=ft.Colors.PRIMARY),
            ft.Text("Page not found", size=22),
            ft.Text(f"There is nothing at {route}.", color=ft.Colors.ON_SURFACE_VARIANT),
            ft.FilledButton("Back to home", icon=ft.Icons.HOME, on_click=lambda _: page.go("/")),
        ],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        alignment=ft.MainAxisAlignment.CENTER,
        expand=True,
    )
