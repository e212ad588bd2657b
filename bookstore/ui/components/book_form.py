import logging
from collections.abc import Callable
from typing import Any

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.domain.entities import Author, Book, Category
from bookstore.domain.forms import BookForm, field_errors
from bookstore.services.images import ImageFile, ImageValidationError
from bookstore.ui.components.image_picker import ImagePicker
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext

logger = logging.getLogger(__name__)


def author_id_for(authors: list[Author], name: str) -> str:
    """Books carry the author's name only; the form needs the id."""
    return next((a.id for a in authors if a.name == name), "")


def initial_values(book: Book | None, authors: list[Author]) -> dict[str, Any]:
    if book is None:
        return {"images": []}
    return {
        "title": book.title,
        "author_id": author_id_for(authors, book.author),
        "description": book.description,
        "price": str(int(book.price)) if book.price == int(book.price) else str(book.price),
        "quantity": str(book.quantity),
        "category_id": book.category.id,
        "images": list(book.images),
    }


def BookFormContent(
    page: ft.Page,
    ctx: ServiceContext,
    on_submit: Callable[[BookForm], None],
    initial: Book | None = None,
    submit_text: str = "Save",
) -> ft.Control:
    try:
        categories: list[Category] = ctx.categories.list_all()
        authors: list[Author] = ctx.authors.list_all()
    except ApiError as e:
        logger.error(f"Failed to load form options: {e}")
        show_toast(page, str(e), "error")
        categories, authors = [], []

    values = initial_values(initial, authors)
    images: list[str] = list(values.get("images", []))

    title = ft.TextField(label="Title", value=values.get("title", ""))
    author = ft.Dropdown(
        label="Author",
        value=values.get("author_id") or None,
        options=[ft.dropdown.Option(a.id, a.name) for a in authors],
    )
    description = ft.TextField(
        label="Description", value=values.get("description", ""), multiline=True, min_lines=3
    )
    price = ft.TextField(
        label="Price", value=values.get("price", ""), keyboard_type=ft.KeyboardType.NUMBER
    )
    quantity = ft.TextField(
        label="Stock quantity",
        value=values.get("quantity", ""),
        keyboard_type=ft.KeyboardType.NUMBER,
    )
    category = ft.Dropdown(
        label="Category",
        value=values.get("category_id") or None,
        options=[ft.dropdown.Option(c.id, c.name) for c in categories],
    )
    images_error = ft.Text(color=ft.Colors.ERROR, visible=False)
    image_row = ft.Row(wrap=True)

    fields: dict[str, Any] = {
        "title": title,
        "author_id": author,
        "description": description,
        "price": price,
        "quantity": quantity,
        "category_id": category,
    }

    def render_images() -> None:
        def remove(url: str) -> Callable[[ft.ControlEvent], None]:
            def handler(_: ft.ControlEvent) -> None:
                images.remove(url)
                render_images()
                page.update()
            return handler

        image_row.controls = [
            ft.Stack(
                [
                    ft.Image(src=url, width=90, height=120, fit=ft.ImageFit.COVER),
                    ft.IconButton(ft.Icons.CLOSE, icon_size=16, on_click=remove(url), right=0, top=0),
                ],
                width=90,
                height=120,
            )
            for url in images
        ]

    def add_urls(urls: list[str]) -> None:
        for url in urls:
            if url not in images:
                images.append(url)
        render_images()
        page.update()

    def on_files(files: list[ImageFile]) -> None:
        uploaded: list[str] = []
        for f in files:
            try:
                uploaded.append(ctx.image_service.upload(f))
            except (ImageValidationError, ApiError) as e:
                show_toast(page, f"{f.filename}: {e}", "error")
        if uploaded:
            show_toast(page, f"Uploaded {len(uploaded)} image(s)", "success")
            add_urls(uploaded)

    picker = ImagePicker(page, on_files, upload_dir=ctx.upload_dir)

    def open_gallery(_: ft.ControlEvent) -> None:
        try:
            gallery = ctx.image_service.list_images()
        except ApiError as e:
            show_toast(page, str(e), "error")
            return

        dialog = ft.AlertDialog(title=ft.Text("Choose from gallery"))

        def choose(url: str) -> Callable[[ft.ControlEvent], None]:
            def handler(_: ft.ControlEvent) -> None:
                page.close(dialog)
                add_urls([url])
            return handler

        dialog.content = ft.Container(
            content=ft.GridView(
                [
                    ft.Container(
                        content=ft.Image(src=img.url, fit=ft.ImageFit.COVER),
                        on_click=choose(img.url),
                        tooltip=img.filename,
                    )
                    for img in gallery
                ],
                max_extent=110,
                spacing=6,
                run_spacing=6,
            ),
            width=520,
            height=400,
        )
        dialog.actions = [ft.TextButton("Close", on_click=lambda _: page.close(dialog))]
        page.open(dialog)

    def submit(_: ft.ControlEvent) -> None:
        data = {name: control.value for name, control in fields.items()}
        data["images"] = list(images)

        for control in fields.values():
            control.error_text = None
        images_error.visible = False

        try:
            form = BookForm.model_validate(data)
        except ValidationError as exc:
            for name, message in field_errors(exc).items():
                if name in fields:
                    fields[name].error_text = message
                elif name == "images":
                    images_error.value = message
                    images_error.visible = True
            page.update()
            return

        on_submit(form)

    render_images()

    return ft.Column(
        [
            title,
            author,
            description,
            ft.Row([price, quantity]),
            category,
            ft.Text("Images", weight=ft.FontWeight.BOLD),
            image_row,
            images_error,
            ft.Row(
                [
                    ft.OutlinedButton("Upload images", icon=ft.Icons.UPLOAD, on_click=lambda _: picker.pick()),
                    ft.OutlinedButton("Choose from gallery", icon=ft.Icons.PHOTO_LIBRARY, on_click=open_gallery),
                ]
            ),
            ft.FilledButton(submit_text, icon=ft.Icons.SAVE, on_click=submit),
        ],
        spacing=12,
    )
