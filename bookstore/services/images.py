"""
Image uploads for the admin console.

Files are checked locally (non-empty, size, MIME type, extension) before
anything is sent, and uploads are throttled per user.
"""

import logging
import mimetypes
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from bookstore.api.client import ApiError
from bookstore.api.uploads import UploadsApi
from bookstore.app_shell.rate_limit import RateLimiter
from bookstore.domain.entities import ImageInfo
from bookstore.domain.formatting import format_file_size
from bookstore.rules.models import UploadsRules

logger = logging.getLogger(__name__)


class ImageValidationError(ValueError):
    pass


@dataclass(frozen=True)
class ImageFile:
    filename: str
    data: bytes
    content_type: str | None = None


def guess_content_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


class ImageService:
    def __init__(
        self,
        uploads_api: UploadsApi,
        rules: UploadsRules,
        rate_limiter: RateLimiter | None = None,
        user_id: Callable[[], str | None] | None = None,
    ):
        self.uploads_api = uploads_api
        self.rules = rules
        self.rate_limiter = rate_limiter
        self._user_id = user_id or (lambda: None)

    def validate_file(self, file: ImageFile) -> str:
        """Return the content type to upload with, or raise ImageValidationError."""
        if not file.filename or not file.data:
            raise ImageValidationError("No file selected")

        if len(file.data) > self.rules.max_upload_bytes:
            limit = format_file_size(self.rules.max_upload_bytes)
            raise ImageValidationError(f"File is too large (max {limit})")

        ext = Path(file.filename).suffix.lower()
        if ext not in self.rules.allowlist_extensions:
            raise ImageValidationError(f"Extension '{ext}' is not allowed")

        content_type = file.content_type or guess_content_type(file.filename)
        if content_type not in self.rules.allowlist_mime_types:
            raise ImageValidationError(
                "Unsupported file type (only JPG, PNG, GIF and WebP are allowed)"
            )
        return content_type

    def upload(self, file: ImageFile) -> str:
        content_type = self.validate_file(file)

        user_id = self._user_id() or "anonymous"
        if self.rate_limiter and not self.rate_limiter.check_upload(user_id):
            raise ImageValidationError("Upload limit reached. Please wait a moment.")

        return self.uploads_api.upload_image(file.filename, file.data, content_type)

    def upload_many(self, files: Iterable[ImageFile]) -> tuple[int, int]:
        """Upload each file independently. Returns (succeeded, failed)."""
        success = errors = 0
        for file in files:
            try:
                self.upload(file)
                success += 1
            except (ImageValidationError, ApiError) as e:
                logger.warning(f"Upload of {file.filename} failed: {e}")
                errors += 1
        return success, errors

    def list_images(self, page: int = 0, size: int = 100) -> list[ImageInfo]:
        return self.uploads_api.list_images(page, size)

    def delete(self, filename: str) -> None:
        self.uploads_api.delete_image(filename)

    def delete_many(self, filenames: Iterable[str]) -> tuple[int, int]:
        success = errors = 0
        for name in filenames:
            try:
                self.uploads_api.delete_image(name)
                success += 1
            except ApiError as e:
                logger.warning(f"Delete of {name} failed: {e}")
                errors += 1
        return success, errors

    def image_url(self, filename: str) -> str:
        return self.uploads_api.image_url(filename)
