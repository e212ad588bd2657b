import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.app_shell.router import reload_route, route_with_query
from bookstore.domain.entities import Author, Page
from bookstore.domain.forms import AuthorForm, field_errors
from bookstore.domain.formatting import format_date
from bookstore.ui.components.confirm_dialog import confirm
from bookstore.ui.components.pagination import Pagination
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

ADMIN_AUTHORS_ROUTE = "/admin/authors"


def open_author_dialog(page: ft.Page, ctx: ServiceContext, author: Author | None = None) -> None:
    fields = {
        "name": ft.TextField(label="Name", value=author.name if author else "", autofocus=True),
        "nationality": ft.TextField(label="Nationality", value=(author.nationality or "") if author else ""),
        "birth_date": ft.TextField(
            label="Birth date",
            hint_text="YYYY-MM-DD",
            value=(author.birth_date or "") if author else "",
        ),
        "image_url": ft.TextField(label="Portrait URL", value=(author.image_url or "") if author else ""),
        "biography": ft.TextField(
            label="Biography",
            value=author.biography if author else "",
            multiline=True,
            min_lines=3,
        ),
    }
    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("New author" if author is None else f"Edit {author.name}"),
        content=ft.Column(list(fields.values()), tight=True, width=460, scroll=ft.ScrollMode.AUTO),
    )

    def save(_: ft.ControlEvent) -> None:
        for field in fields.values():
            field.error_text = None
        try:
            form = AuthorForm(**{k: f.value or "" for k, f in fields.items()})
        except ValidationError as e:
            for key, message in field_errors(e).items():
                if key in fields:
                    fields[key].error_text = message
            page.update()
            return
        try:
            if author is None:
                ctx.admin_authors.create(form.to_payload())
            else:
                ctx.admin_authors.update(author.id, form.to_payload())
        except ApiError as e:
            show_toast(page, str(e), "error")
            return
        page.close(dialog)
        show_toast(page, f'Saved "{form.name}".', "success")
        reload_route(page)

    dialog.actions = [
        ft.TextButton("Cancel", on_click=lambda _: page.close(dialog)),
        ft.FilledButton("Save", on_click=save),
    ]
    page.open(dialog)


def AdminAuthorsContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, query: dict[str, str] | None = None
) -> ft.Control:
    query = dict(query or {})
    try:
        current_page = max(0, int(query.get("page", "1")) - 1)
    except ValueError:
        current_page = 0

    def go(**changes: object) -> None:
        params: dict[str, object] = {**query, **changes}
        if "page" not in changes:
            params["page"] = None
        page.go(route_with_query(ADMIN_AUTHORS_ROUTE, params))

    result: Page[Author] = Page()
    nationalities: list[str] = []
    try:
        result = ctx.admin_authors.list_authors(
            page=current_page,
            size=ctx.rules.pagination.admin_page_size,
            name=query.get("name"),
            nationality=query.get("nationality"),
        )
        nationalities = ctx.admin_authors.nationalities()
    except ApiError as e:
        logger.error(f"Failed to list authors: {e}")
        show_toast(page, str(e), "error")

    def delete(author: Author) -> None:
        def run() -> None:
            try:
                ctx.admin_authors.delete(author.id)
            except ApiError as e:
                show_toast(page, str(e), "error")
                return
            show_toast(page, f'Deleted "{author.name}".', "success")
            reload_route(page)

        confirm(page, "Delete author", f'Delete "{author.name}"?', run)

    search = ft.TextField(
        label="Search by name",
        value=query.get("name", ""),
        prefix_icon=ft.Icons.SEARCH,
        width=260,
        on_submit=lambda e: go(name=e.control.value),
    )
    nationality = ft.Dropdown(
        label="Nationality",
        width=200,
        value=query.get("nationality", ""),
        options=[ft.dropdown.Option("", "All")] + [ft.dropdown.Option(n) for n in nationalities],
        on_change=lambda e: go(nationality=e.control.value),
    )

    rows = [
        ft.DataRow(
            cells=[
                ft.DataCell(
                    ft.CircleAvatar(
                        foreground_image_src=a.image_url or None,
                        content=ft.Text(a.name[:1].upper()),
                    )
                ),
                ft.DataCell(ft.Text(a.name)),
                ft.DataCell(ft.Text(a.nationality or "-")),
                ft.DataCell(ft.Text(format_date(a.birth_date) or "-")),
                ft.DataCell(ft.Text("-" if a.books_count is None else str(a.books_count))),
                ft.DataCell(
                    ft.Row(
                        [
                            ft.IconButton(
                                ft.Icons.EDIT,
                                tooltip="Edit",
                                on_click=lambda _, au=a: open_author_dialog(page, ctx, au),
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE,
                                tooltip="Delete",
                                on_click=lambda _, au=a: delete(au),
                            ),
                        ]
                    )
                ),
            ]
        )
        for a in result.data
    ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text("Authors", size=24, weight=ft.FontWeight.BOLD),
                        ft.FilledButton(
                            "Add author",
                            icon=ft.Icons.PERSON_ADD,
                            on_click=lambda _: open_author_dialog(page, ctx),
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Row([search, nationality], wrap=True),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("")),
                        ft.DataColumn(ft.Text("Name")),
                        ft.DataColumn(ft.Text("Nationality")),
                        ft.DataColumn(ft.Text("Born")),
                        ft.DataColumn(ft.Text("Books"), numeric=True),
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
