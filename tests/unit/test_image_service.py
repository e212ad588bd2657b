from unittest.mock import Mock

import pytest

from bookstore.api.client import ApiError
from bookstore.app_shell.rate_limit import RateLimiter
from bookstore.rules.models import RateLimitRules, RateLimitWindow
from bookstore.services.images import ImageFile, ImageService, ImageValidationError, guess_content_type

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 32


@pytest.fixture
def uploads_api():
    api = Mock()
    api.upload_image.side_effect = lambda name, data, ctype: f"http://api.test/uploads/{name}"
    return api


@pytest.fixture
def service(uploads_api, rules):
    return ImageService(uploads_api, rules.uploads)


def test_guess_content_type():
    assert guess_content_type("cover.JPG") == "image/jpeg"
    assert guess_content_type("noext") == "application/octet-stream"


def test_valid_file_uploads_with_detected_type(service, uploads_api):
    url = service.upload(ImageFile("cover.png", PNG))

    assert url == "http://api.test/uploads/cover.png"
    uploads_api.upload_image.assert_called_once_with("cover.png", PNG, "image/png")


@pytest.mark.parametrize(
    "file,message",
    [
        (ImageFile("", PNG), "No file selected"),
        (ImageFile("a.png", b""), "No file selected"),
        (ImageFile("a.exe", PNG), "Extension '.exe' is not allowed"),
        (ImageFile("a.png", PNG, content_type="text/plain"), "Unsupported file type"),
    ],
)
def test_invalid_files_are_rejected(service, uploads_api, file, message):
    with pytest.raises(ImageValidationError, match=message):
        service.upload(file)
    uploads_api.upload_image.assert_not_called()


def test_oversized_file_is_rejected(service, rules):
    big = ImageFile("big.jpg", b"0" * (rules.uploads.max_upload_bytes + 1))
    with pytest.raises(ImageValidationError, match=r"max 5 MB"):
        service.validate_file(big)


def test_upload_rate_limit(uploads_api, rules):
    limiter = RateLimiter(
        RateLimitRules(
            login=RateLimitWindow(window_seconds=60, max_attempts=5),
            upload=RateLimitWindow(window_seconds=60, max_requests=2),
        )
    )
    service = ImageService(uploads_api, rules.uploads, limiter, user_id=lambda: "7")

    service.upload(ImageFile("a.png", PNG))
    service.upload(ImageFile("b.png", PNG))
    with pytest.raises(ImageValidationError, match="Upload limit reached"):
        service.upload(ImageFile("c.png", PNG))


def test_upload_many_counts_each_file(service, uploads_api):
    def upload(name, data, ctype):
        if name == "fail.png":
            raise ApiError("Disk full", 500)
        return f"http://api.test/uploads/{name}"

    uploads_api.upload_image.side_effect = upload

    files = [ImageFile("a.png", PNG), ImageFile("bad.txt", PNG), ImageFile("fail.png", PNG)]
    assert service.upload_many(files) == (1, 2)


def test_delete_many(service, uploads_api):
    uploads_api.delete_image.side_effect = [None, ApiError("gone", 404), None]
    assert service.delete_many(["a.png", "b.png", "c.png"]) == (2, 1)
