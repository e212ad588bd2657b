import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.app_shell.router import reload_route, route_with_query
from bookstore.domain.catalog_query import SORT_OPTIONS, sort_option, sort_value_for
from bookstore.domain.entities import Book, Category, Page
from bookstore.domain.forms import BookForm
from bookstore.domain.formatting import format_currency
from bookstore.ui.components.book_form import BookFormContent
from bookstore.ui.components.confirm_dialog import confirm
from bookstore.ui.components.pagination import Pagination
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

ADMIN_BOOKS_ROUTE = "/admin/books"

STOCK_FILTERS = {
    "": "All stock",
    "true": "In stock",
    "false": "Out of stock",
}


def AdminBooksContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, query: dict[str, str] | None = None
) -> ft.Control:
    query = dict(query or {})
    try:
        current_page = max(0, int(query.get("page", "1")) - 1)
    except ValueError:
        current_page = 0

    filters = {k: v for k, v in query.items() if k in ("title", "categoryId", "inStock", "sortBy", "sortDir")}

    def go(**changes: object) -> None:
        params: dict[str, object] = {**query, **changes}
        if any(k != "page" for k in changes):
            params["page"] = None
        page.go(route_with_query(ADMIN_BOOKS_ROUTE, params))

    result: Page[Book] = Page()
    categories: list[Category] = []
    try:
        result = ctx.admin_books.list_books(current_page, ctx.rules.pagination.admin_page_size, filters)
        categories = ctx.categories.list_all()
    except ApiError as e:
        logger.error(f"Failed to load admin books: {e}")
        show_toast(page, str(e), "error")

    selected: set[str] = set()
    bulk_button = ft.OutlinedButton(
        "Delete selected", icon=ft.Icons.DELETE_SWEEP, disabled=True
    )

    def toggle(book_id: str, checked: bool) -> None:
        if checked:
            selected.add(book_id)
        else:
            selected.discard(book_id)
        bulk_button.disabled = not selected
        bulk_button.text = f"Delete selected ({len(selected)})" if selected else "Delete selected"
        page.update()

    def delete_one(book: Book) -> None:
        def run() -> None:
            try:
                ctx.admin_books.delete(book.id)
            except ApiError as e:
                show_toast(page, str(e), "error")
                return
            show_toast(page, f'Deleted "{book.title}".', "success")
            reload_route(page)

        confirm(page, "Delete book", f'Delete "{book.title}"? This cannot be undone.', run)

    def delete_selected(_: ft.ControlEvent) -> None:
        ids = sorted(selected)

        def run() -> None:
            try:
                ctx.admin_books.bulk_delete(ids)
            except ApiError as e:
                show_toast(page, str(e), "error")
                return
            show_toast(page, f"Deleted {len(ids)} book(s).", "success")
            reload_route(page)

        confirm(page, "Delete books", f"Delete {len(ids)} selected book(s)?", run)

    bulk_button.on_click = delete_selected

    title_field = ft.TextField(
        label="Title",
        value=query.get("title", ""),
        width=220,
        prefix_icon=ft.Icons.SEARCH,
        on_submit=lambda e: go(title=e.control.value),
    )
    category_dropdown = ft.Dropdown(
        label="Category",
        width=200,
        value=query.get("categoryId", ""),
        options=[ft.dropdown.Option("", "All categories")]
        + [ft.dropdown.Option(c.id, c.name) for c in categories],
        on_change=lambda e: go(categoryId=e.control.value),
    )
    stock_dropdown = ft.Dropdown(
        label="Stock",
        width=160,
        value=query.get("inStock", ""),
        options=[ft.dropdown.Option(k, v) for k, v in STOCK_FILTERS.items()],
        on_change=lambda e: go(inStock=e.control.value),
    )

    def change_sort(value: str) -> None:
        opt = sort_option(value)
        if opt.value == "default":
            go(sortBy=None, sortDir=None)
        else:
            go(sortBy=opt.field, sortDir=opt.direction)

    sort_dropdown = ft.Dropdown(
        label="Sort",
        width=200,
        value=sort_value_for(query.get("sortBy"), query.get("sortDir")),
        options=[ft.dropdown.Option(o.value, o.label) for o in SORT_OPTIONS],
        on_change=lambda e: change_sort(e.control.value),
    )

    rows = [
        ft.DataRow(
            cells=[
                ft.DataCell(
                    ft.Checkbox(on_change=lambda e, bid=b.id: toggle(bid, bool(e.control.value)))
                ),
                ft.DataCell(
                    ft.Image(src=b.cover or "", width=40, height=56, fit=ft.ImageFit.COVER,
                             error_content=ft.Icon(ft.Icons.MENU_BOOK))
                ),
                ft.DataCell(ft.Text(b.title)),
                ft.DataCell(ft.Text(b.author)),
                ft.DataCell(ft.Text(b.category.name)),
                ft.DataCell(ft.Text(format_currency(b.price))),
                ft.DataCell(
                    ft.Text(str(b.quantity), color=None if b.in_stock else ft.Colors.RED_700)
                ),
                ft.DataCell(
                    ft.Row(
                        [
                            ft.IconButton(
                                ft.Icons.EDIT,
                                tooltip="Edit",
                                on_click=lambda _, bid=b.id: page.go(f"/admin/books/edit/{bid}"),
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE,
                                tooltip="Delete",
                                on_click=lambda _, book=b: delete_one(book),
                            ),
                        ]
                    )
                ),
            ]
        )
        for b in result.data
    ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text("Books", size=24, weight=ft.FontWeight.BOLD),
                        ft.Row(
                            [
                                bulk_button,
                                ft.FilledButton(
                                    "Add book",
                                    icon=ft.Icons.ADD,
                                    on_click=lambda _: page.go("/admin/books/new"),
                                ),
                            ]
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Row([title_field, category_dropdown, stock_dropdown, sort_dropdown], wrap=True),
                ft.Text(f"{result.total_items} book(s)", color=ft.Colors.ON_SURFACE_VARIANT),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("")),
                        ft.DataColumn(ft.Text("Cover")),
                        ft.DataColumn(ft.Text("Title")),
                        ft.DataColumn(ft.Text("Author")),
                        ft.DataColumn(ft.Text("Category")),
                        ft.DataColumn(ft.Text("Price"), numeric=True),
                        ft.DataColumn(ft.Text("Stock"), numeric=True),
                        ft.DataColumn(ft.Text("Actions")),
                    ],
                    rows=rows,
                ),
                Pagination(result.current_page, result.total_pages, on_page_change=lambda n: go(page=n + 1)),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )


def BookEditorContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, book_id: str | None = None
) -> ft.Control:
    """Add (book_id None) or edit form for a single book."""
    book: Book | None = None
    if book_id:
        try:
            book = ctx.admin_books.get(book_id)
        except ApiError as e:
            logger.error(f"Failed to load book {book_id}: {e}")
            show_toast(page, str(e), "error")
            return ft.Column(
                [
                    ft.Text("Book not found.", size=20),
                    ft.TextButton("Back to books", on_click=lambda _: page.go(ADMIN_BOOKS_ROUTE)),
                ]
            )

    def save(form: BookForm) -> None:
        try:
            if book is None:
                created = ctx.admin_books.create(form.to_payload())
                show_toast(page, f'Added "{created.title}".', "success")
            else:
                updated = ctx.admin_books.update(book.id, form.to_payload())
                show_toast(page, f'Saved "{updated.title}".', "success")
        except ApiError as e:
            logger.error(f"Saving book failed: {e}")
            show_toast(page, str(e), "error")
            return
        page.go(ADMIN_BOOKS_ROUTE)

    heading = "Add book" if book is None else f"Edit: {book.title}"
    return ft.Container(
        content=ft.Column(
            [
                ft.TextButton("Back to books", icon=ft.Icons.ARROW_BACK, on_click=lambda _: page.go(ADMIN_BOOKS_ROUTE)),
                ft.Text(heading, size=24, weight=ft.FontWeight.BOLD),
                ft.Divider(),
                BookFormContent(
                    page,
                    ctx,
                    on_submit=save,
                    initial=book,
                    submit_text="Create book" if book is None else "Save changes",
                ),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
        width=720,
    )
