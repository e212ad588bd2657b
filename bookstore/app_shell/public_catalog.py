import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.app_shell.cart_page import add_to_cart
from bookstore.domain.catalog_query import SORT_OPTIONS, BookQuery, sort_value_for
from bookstore.domain.entities import Book, Category, Page
from bookstore.domain.formatting import format_currency
from bookstore.ui.components.book_card import BookCard, cover_image
from bookstore.ui.components.filter_sidebar import FilterSidebar
from bookstore.ui.components.pagination import Pagination
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def BooksContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, query: dict[str, str] | None = None
) -> ft.Control:
    q = BookQuery.from_params(query or {}, default_limit=ctx.rules.pagination.catalog_page_size)

    result: Page[Book] = Page()
    categories: list[Category] = []
    try:
        result = ctx.books.list_books(q.api_page, q.limit, q.api_filters())
        categories = ctx.categories.list_all()
    except ApiError as e:
        logger.error(f"Failed to fetch books: {e}")
        show_toast(page, "Could not load the book list.", "error")

    def apply(**changes: object) -> None:
        page.go(q.update(**changes).route())

    sort_dropdown = ft.Dropdown(
        label="Sort by",
        width=220,
        value=sort_value_for(q.filters.get("sortBy"), q.filters.get("sortDir")),
        options=[ft.dropdown.Option(o.value, o.label) for o in SORT_OPTIONS],
        on_change=lambda e: page.go(q.with_sort(e.control.value).route()),
    )

    if result.data:
        grid: ft.Control = ft.Row(
            [
                BookCard(
                    b,
                    on_open=lambda book: page.go(f"/books/{book.id}"),
                    on_add_to_cart=lambda book: add_to_cart(page, ctx, state, book),
                )
                for b in result.data
            ],
            wrap=True,
            spacing=16,
            run_spacing=16,
        )
    else:
        grid = ft.Text("No books match these filters.", color=ft.Colors.ON_SURFACE_VARIANT)

    main = ft.Column(
        [
            ft.Row(
                [
                    ft.Text(f"Showing {len(result.data)} of {result.total_items} results"),
                    sort_dropdown,
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            grid,
            Pagination(
                result.current_page,
                result.total_pages,
                on_page_change=lambda n: apply(page=n + 1),
            ),
        ],
        expand=True,
        scroll=ft.ScrollMode.AUTO,
        spacing=16,
    )

    return ft.Column(
        [
            ft.Text("Explore books", size=28, weight=ft.FontWeight.BOLD),
            ft.Row(
                [
                    FilterSidebar(categories, q.filters, on_filter_change=lambda changes: apply(**changes)),
                    ft.VerticalDivider(width=1),
                    main,
                ],
                vertical_alignment=ft.CrossAxisAlignment.START,
                expand=True,
            ),
        ],
        expand=True,
    )


def BookDetailContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, book_id: str
) -> ft.Control:
    try:
        book = ctx.books.get_book(book_id)
    except ApiError as e:
        logger.error(f"Failed to fetch book {book_id}: {e}")
        return ft.Column(
            [
                ft.Text("Book not found.", size=22),
                ft.TextButton("Back to books", on_click=lambda _: page.go("/books")),
            ]
        )

    quantity = ft.TextField(
        value="1", width=60, text_align=ft.TextAlign.CENTER, read_only=True
    )
    selected_image = ft.Container(content=cover_image(book, width=300, height=420))

    def current() -> int:
        try:
            return int(quantity.value or 1)
        except ValueError:
            return 1

    def step(delta: int) -> None:
        # Bounded by stock on hand
        quantity.value = str(min(max(1, current() + delta), max(1, book.quantity)))
        page.update()

    def show_image(url: str) -> None:
        selected_image.content = ft.Image(src=url, width=300, height=420, fit=ft.ImageFit.COVER)
        page.update()

    thumbnails = ft.Row(
        [
            ft.Container(
                content=ft.Image(src=url, width=60, height=80, fit=ft.ImageFit.COVER),
                on_click=lambda _, u=url: show_image(u),
            )
            for url in book.images
        ],
        wrap=True,
    )

    stock = (
        ft.Text(f"In stock: {book.quantity}", color=ft.Colors.GREEN_700)
        if book.in_stock
        else ft.Text("Out of stock", color=ft.Colors.RED_700)
    )

    info = ft.Column(
        [
            ft.Text(book.title, size=28, weight=ft.FontWeight.BOLD),
            ft.Text(f"by {book.author}", size=16, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(f"Category: {book.category.name}") if book.category.name else ft.Container(),
            ft.Text(format_currency(book.price), size=24, color=ft.Colors.PRIMARY),
            stock,
            ft.Row(
                [
                    ft.IconButton(ft.Icons.REMOVE, on_click=lambda _: step(-1)),
                    quantity,
                    ft.IconButton(ft.Icons.ADD, on_click=lambda _: step(1)),
                    ft.FilledButton(
                        "Add to cart",
                        icon=ft.Icons.ADD_SHOPPING_CART,
                        disabled=not book.in_stock,
                        on_click=lambda _: add_to_cart(page, ctx, state, book, current()),
                    ),
                ]
            ),
            ft.Divider(),
            ft.Text("Description", weight=ft.FontWeight.BOLD),
            ft.Text(book.description or "No description."),
        ],
        expand=True,
        spacing=10,
    )

    return ft.Column(
        [
            ft.TextButton("Back to books", icon=ft.Icons.ARROW_BACK, on_click=lambda _: page.go("/books")),
            ft.Row(
                [ft.Column([selected_image, thumbnails]), info],
                vertical_alignment=ft.CrossAxisAlignment.START,
                spacing=30,
            ),
        ],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
