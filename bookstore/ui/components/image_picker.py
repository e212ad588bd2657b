"""
File picking for image uploads.

Desktop runs hand back a local path that is read directly. Browser runs have
no path: the file is first uploaded to the Flet server's upload directory and
read from there once the transfer completes.

Only one picker lives in the page overlay at a time; building a new one
replaces the picker left behind by the previous view.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import flet as ft

from bookstore.services.images import ImageFile
from bookstore.ui.components.toast import show_toast

logger = logging.getLogger(__name__)

UPLOAD_URL_EXPIRY_SECONDS = 600
PICKER_TAG = "bookstore.image_picker"


class ImagePicker:
    def __init__(
        self,
        page: ft.Page,
        on_files: Callable[[list[ImageFile]], None],
        upload_dir: str | Path,
        allow_multiple: bool = True,
        on_error: Callable[[str], None] | None = None,
    ):
        self.page = page
        self.on_files = on_files
        self.on_error = on_error or (lambda message: show_toast(page, message, "error"))
        self.upload_dir = Path(upload_dir)
        self.allow_multiple = allow_multiple
        self.picker = ft.FilePicker(on_result=self._on_result, on_upload=self._on_upload)
        self.picker.data = PICKER_TAG

        page.overlay[:] = [c for c in page.overlay if getattr(c, "data", None) != PICKER_TAG]
        page.overlay.append(self.picker)

    def pick(self) -> None:
        self.picker.pick_files(
            allow_multiple=self.allow_multiple,
            file_type=ft.FilePickerFileType.IMAGE,
        )

    def _on_result(self, e: ft.FilePickerResultEvent) -> None:
        if not e.files:
            return

        local = [f for f in e.files if f.path]
        remote = [f for f in e.files if not f.path]

        if local:
            files: list[ImageFile] = []
            for f in local:
                try:
                    files.append(ImageFile(f.name, Path(f.path).read_bytes()))
                except OSError as err:
                    logger.error(f"Cannot read {f.path}: {err}")
                    self.on_error(f"Cannot read {f.name}.")
            if files:
                self.on_files(files)

        if remote:
            self.picker.upload([
                ft.FilePickerUploadFile(
                    f.name,
                    upload_url=self.page.get_upload_url(f.name, UPLOAD_URL_EXPIRY_SECONDS),
                )
                for f in remote
            ])

    def _on_upload(self, e: ft.FilePickerUploadEvent) -> None:
        if e.error:
            logger.error(f"Transfer of {e.file_name} failed: {e.error}")
            self.on_error(f"Transfer of {e.file_name} failed: {e.error}")
            return
        if e.progress is None or e.progress < 1.0:
            return

        path = self.upload_dir / e.file_name
        try:
            data = path.read_bytes()
        except OSError as err:
            logger.error(f"Cannot read transferred file {path}: {err}")
            self.on_error(f"Cannot read {e.file_name} after transfer.")
            return
        path.unlink(missing_ok=True)
        self.on_files([ImageFile(e.file_name, data)])
