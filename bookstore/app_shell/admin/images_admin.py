import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.app_shell.router import reload_route
from bookstore.domain.entities import ImageInfo
from bookstore.domain.formatting import format_datetime, format_file_size
from bookstore.services.images import ImageFile
from bookstore.ui.components.confirm_dialog import confirm
from bookstore.ui.components.image_picker import ImagePicker
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def upload_summary(success: int, errors: int) -> tuple[str, str]:
    """Toast text and level for a batch upload or delete."""
    if errors == 0:
        return f"{success} file(s) done.", "success"
    if success == 0:
        return f"All {errors} file(s) failed.", "error"
    return f"{success} file(s) done, {errors} failed.", "warning"


def AdminImagesContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    images: list[ImageInfo] = []
    try:
        images = ctx.image_service.list_images()
    except ApiError as e:
        logger.error(f"Failed to list images: {e}")
        show_toast(page, str(e), "error")

    selected: set[str] = set()
    delete_selected_button = ft.OutlinedButton("Delete selected", icon=ft.Icons.DELETE_SWEEP, disabled=True)

    def on_files(files: list[ImageFile]) -> None:
        success, errors = ctx.image_service.upload_many(files)
        message, level = upload_summary(success, errors)
        show_toast(page, f"Upload: {message}", level)  # type: ignore[arg-type]
        if success:
            reload_route(page)

    picker = ImagePicker(page, on_files, ctx.upload_dir, allow_multiple=True)

    def toggle(filename: str, checked: bool) -> None:
        if checked:
            selected.add(filename)
        else:
            selected.discard(filename)
        delete_selected_button.disabled = not selected
        page.update()

    def delete_one(image: ImageInfo) -> None:
        def run() -> None:
            try:
                ctx.image_service.delete(image.filename)
            except ApiError as e:
                show_toast(page, str(e), "error")
                return
            show_toast(page, f"Deleted {image.filename}.", "success")
            reload_route(page)

        confirm(page, "Delete image", f"Delete {image.filename}?", run)

    def delete_selected(_: ft.ControlEvent) -> None:
        names = sorted(selected)

        def run() -> None:
            success, errors = ctx.image_service.delete_many(names)
            message, level = upload_summary(success, errors)
            show_toast(page, f"Delete: {message}", level)  # type: ignore[arg-type]
            reload_route(page)

        confirm(page, "Delete images", f"Delete {len(names)} selected image(s)?", run)

    delete_selected_button.on_click = delete_selected

    def copy_url(url: str) -> None:
        page.set_clipboard(url)
        show_toast(page, "URL copied.")

    def tile(image: ImageInfo) -> ft.Control:
        src = image.url or ctx.image_service.image_url(image.filename)
        return ft.Container(
            content=ft.Column(
                [
                    ft.Stack(
                        [
                            ft.Image(
                                src=src,
                                width=180,
                                height=140,
                                fit=ft.ImageFit.COVER,
                                border_radius=8,
                                error_content=ft.Icon(ft.Icons.BROKEN_IMAGE),
                            ),
                            ft.Container(
                                ft.Checkbox(on_change=lambda e, n=image.filename: toggle(n, bool(e.control.value))),
                                top=0,
                                left=0,
                            ),
                        ]
                    ),
                    ft.Text(image.filename, size=12, max_lines=1, overflow=ft.TextOverflow.ELLIPSIS, tooltip=image.filename),
                    ft.Row(
                        [
                            ft.Text(
                                f"{format_file_size(image.size)} · {format_datetime(image.last_modified)}",
                                size=11,
                                color=ft.Colors.ON_SURFACE_VARIANT,
                                expand=True,
                            ),
                            ft.IconButton(
                                ft.Icons.CONTENT_COPY,
                                icon_size=16,
                                tooltip="Copy URL",
                                on_click=lambda _, url=src: copy_url(url),
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE,
                                icon_size=16,
                                tooltip="Delete",
                                on_click=lambda _, img=image: delete_one(img),
                            ),
                        ],
                        spacing=0,
                    ),
                ],
                spacing=4,
                width=180,
            ),
            padding=8,
            border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            border_radius=10,
        )

    total_size = sum(i.size for i in images)
    limit = format_file_size(ctx.rules.uploads.max_upload_bytes)

    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text("Images", size=24, weight=ft.FontWeight.BOLD),
                        ft.Row(
                            [
                                delete_selected_button,
                                ft.ElevatedButton("Upload images", icon=ft.Icons.UPLOAD, on_click=lambda _: picker.pick()),
                            ]
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Text(
                    f"{len(images)} image(s), {format_file_size(total_size)} in total. "
                    f"JPG, PNG, GIF or WebP up to {limit} each.",
                    color=ft.Colors.ON_SURFACE_VARIANT,
                ),
                ft.Divider(),
                ft.Row([tile(i) for i in images], wrap=True, spacing=12, run_spacing=12)
                if images
                else ft.Text("No images uploaded yet."),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )
