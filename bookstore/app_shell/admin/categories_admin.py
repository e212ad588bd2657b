import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.app_shell.router import reload_route
from bookstore.domain.entities import Category
from bookstore.domain.forms import CategoryForm, field_errors
from bookstore.ui.components.confirm_dialog import confirm
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def open_category_dialog(page: ft.Page, ctx: ServiceContext, category: Category | None = None) -> None:
    """Create (category None) or edit dialog; reloads the view on save."""
    name = ft.TextField(label="Name", value=category.name if category else "", autofocus=True)
    description = ft.TextField(
        label="Description",
        value=category.description if category else "",
        multiline=True,
        min_lines=2,
    )
    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("New category" if category is None else "Edit category"),
        content=ft.Column([name, description], tight=True, width=420),
    )

    def save(_: ft.ControlEvent) -> None:
        name.error_text = None
        try:
            form = CategoryForm(name=name.value or "", description=description.value or "")
        except ValidationError as e:
            name.error_text = field_errors(e).get("name")
            page.update()
            return
        try:
            if category is None:
                ctx.categories.create(form.to_payload())
            else:
                ctx.categories.update(category.id, form.to_payload())
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


def AdminCategoriesContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    categories: list[Category] = []
    try:
        categories = ctx.categories.list_all()
    except ApiError as e:
        logger.error(f"Failed to list categories: {e}")
        show_toast(page, str(e), "error")

    def delete(category: Category) -> None:
        def run() -> None:
            try:
                ctx.categories.delete(category.id)
            except ApiError as e:
                # Categories that still hold books are refused by the backend
                show_toast(page, str(e), "error")
                return
            show_toast(page, f'Deleted "{category.name}".', "success")
            reload_route(page)

        confirm(page, "Delete category", f'Delete "{category.name}"?', run)

    rows = [
        ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(c.name, weight=ft.FontWeight.W_500)),
                ft.DataCell(ft.Text(c.description or "-", max_lines=2, width=360)),
                ft.DataCell(
                    ft.Row(
                        [
                            ft.IconButton(
                                ft.Icons.EDIT,
                                tooltip="Edit",
                                on_click=lambda _, cat=c: open_category_dialog(page, ctx, cat),
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE,
                                tooltip="Delete",
                                on_click=lambda _, cat=c: delete(cat),
                            ),
                        ]
                    )
                ),
            ]
        )
        for c in categories
    ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text("Categories", size=24, weight=ft.FontWeight.BOLD),
                        ft.FilledButton(
                            "Add category",
                            icon=ft.Icons.ADD,
                            on_click=lambda _: open_category_dialog(page, ctx),
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Divider(),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("Name")),
                        ft.DataColumn(ft.Text("Description")),
                        ft.DataColumn(ft.Text("Actions")),
                    ],
                    rows=rows,
                )
                if categories
                else ft.Text("No categories yet."),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )
