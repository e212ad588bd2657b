import logging
from urllib.parse import quote

from bookstore.api.client import ApiClient, ApiError
from bookstore.api.mappers import adapt_image
from bookstore.domain.entities import ImageInfo

logger = logging.getLogger(__name__)


class UploadsApi:
    """Image upload endpoints. Files are served from <origin>/uploads/."""

    def __init__(self, client: ApiClient):
        self.client = client

    def upload_image(self, filename: str, data: bytes, content_type: str) -> str:
        body = self.client.post(
            "/upload/image", files={"file": (filename, data, content_type)}
        )
        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or "Upload failed", payload=body)
        logger.info(f"Uploaded {filename} -> {body.get('url')}")
        return str(body["url"])

    def list_images(self, page: int = 0, size: int = 100) -> list[ImageInfo]:
        data = self.client.get("/upload/images", {"page": page, "size": size})
        if not isinstance(data, list):
            return []
        return [adapt_image(item) for item in data]

    def delete_image(self, filename: str) -> None:
        self.client.delete(f"/upload/images/{quote(filename)}")

    def image_url(self, filename: str) -> str:
        return f"{self.client.origin}/uploads/{filename}"
