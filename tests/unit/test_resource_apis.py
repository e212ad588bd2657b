import httpx
import pytest

from bookstore.api.admin_books import AdminBooksApi
from bookstore.api.admin_orders import AdminOrdersApi
from bookstore.api.admin_users import AdminUsersApi
from bookstore.api.auth import AuthApi
from bookstore.api.books import BooksApi
from bookstore.api.client import ApiError
from bookstore.api.orders import OrdersApi, order_payload
from bookstore.api.uploads import UploadsApi
from bookstore.api.users import UsersApi, split_name
from bookstore.domain.cart import add_item
from tests.fakes.data import book_json, json_response, make_book, request_json


class Recorder:
    """MockTransport handler that records requests and replies from a route table."""

    def __init__(self, routes: dict[tuple[str, str], object]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = self.routes.get((request.method, request.url.path))
        if body is None:
            return json_response({"message": "not found"}, 404)
        return json_response(body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def test_login_posts_credentials(make_client):
    rec = Recorder({("POST", "/api/auth/login"): {"token": "tok", "id": 1, "email": "a@x.vn", "role": "CUSTOMER"}})

    auth = AuthApi(make_client(rec)).login("alice", "pw")

    assert request_json(rec.last) == {"usernameOrEmail": "alice", "password": "pw"}
    assert auth.token == "tok"
    assert auth.user.role == "USER"


def test_register_returns_message(make_client):
    rec = Recorder({("POST", "/api/auth/register"): {"message": "Registered"}})
    assert AuthApi(make_client(rec)).register("An", "an@x.vn", "secret1") == "Registered"
    assert request_json(rec.last) == {"name": "An", "email": "an@x.vn", "password": "secret1"}


def test_list_books_forwards_known_filters_only(make_client):
    rec = Recorder({("GET", "/api/books"): {"content": [book_json(1)], "totalElements": 1, "totalPages": 1, "number": 0}})

    page = BooksApi(make_client(rec)).list_books(0, 12, {"title": "Mat", "bogus": "x", "category": ""})

    params = dict(rec.last.url.params)
    assert params == {"page": "0", "limit": "12", "title": "Mat"}
    assert page.data[0].title == "Book 1"


def test_latest_and_bestsellers(make_client):
    rec = Recorder({
        ("GET", "/api/books/latest"): [book_json(1), book_json(2)],
        ("GET", "/api/books/bestsellers"): [book_json(3)],
    })
    api = BooksApi(make_client(rec))

    assert [b.id for b in api.latest(8)] == ["1", "2"]
    assert rec.last.url.params["limit"] == "8"
    assert [b.id for b in api.bestsellers(4)] == ["3"]


def test_order_payload_uses_numeric_book_ids():
    items = add_item([], make_book("12"), 2).items
    assert order_payload("Hanoi", "COD", items) == {
        "shippingAddress": "Hanoi",
        "paymentMethod": "COD",
        "orderItems": [{"bookId": 12, "quantity": 2}],
    }


def test_create_order(make_client):
    rec = Recorder({("POST", "/api/orders"): {"id": 5, "status": "PENDING", "totalAmount": 200000}})
    items = add_item([], make_book("1"), 2).items

    order = OrdersApi(make_client(rec)).create_order("Hanoi", "ONLINE", items)

    assert order.id == "5"
    assert request_json(rec.last)["paymentMethod"] == "ONLINE"


def test_split_name():
    assert split_name("Nguyen Van A") == ("Nguyen", "Van A")
    assert split_name("  Madonna ") == ("Madonna", "")


def test_update_profile_sends_name_parts(make_client):
    rec = Recorder({("PUT", "/api/users/me"): {"id": 1, "email": "a@x.vn", "firstName": "Nguyen", "lastName": "Van A"}})

    user = UsersApi(make_client(rec)).update_profile("Nguyen Van A", "Hue", "0912345678")

    assert request_json(rec.last) == {"firstName": "Nguyen", "lastName": "Van A", "address": "Hue", "phone": "0912345678"}
    assert user.name == "Nguyen Van A"


def test_change_password(make_client):
    rec = Recorder({("PUT", "/api/users/me/password"): {"message": "ok"}})
    UsersApi(make_client(rec)).change_password("old", "newpass")
    assert request_json(rec.last) == {"oldPassword": "old", "newPassword": "newpass"}


def test_upload_image_multipart(make_client):
    rec = Recorder({("POST", "/api/upload/image"): {"success": True, "url": "http://api.test/uploads/a.png"}})

    url = UploadsApi(make_client(rec)).upload_image("a.png", b"\x89PNG", "image/png")

    assert url == "http://api.test/uploads/a.png"
    assert rec.last.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="file"; filename="a.png"' in rec.last.content


def test_upload_image_reported_failure(make_client):
    rec = Recorder({("POST", "/api/upload/image"): {"success": False, "message": "Too big"}})
    with pytest.raises(ApiError, match="Too big"):
        UploadsApi(make_client(rec)).upload_image("a.png", b"x", "image/png")


def test_delete_image_quotes_filename(make_client):
    rec = Recorder({("DELETE", "/api/upload/images/my file.png"): {}})
    UploadsApi(make_client(rec)).delete_image("my file.png")
    assert rec.last.url.raw_path == b"/api/upload/images/my%20file.png"


def test_image_url(make_client):
    api = UploadsApi(make_client(Recorder({})))
    assert api.image_url("a.png") == "http://api.test/uploads/a.png"


def test_admin_bulk_delete_books(make_client):
    rec = Recorder({("DELETE", "/api/admin/books/bulk"): {"message": "Books deleted successfully", "deletedCount": 2}})
    AdminBooksApi(make_client(rec)).bulk_delete(["1", "2"])
    assert request_json(rec.last) == {"ids": ["1", "2"]}


def test_admin_update_order_status(make_client):
    rec = Recorder({("PATCH", "/api/orders/admin/9/status"): {"id": 9, "status": "CONFIRMED"}})

    order = AdminOrdersApi(make_client(rec)).update_status("9", "CONFIRMED")

    assert rec.last.url.params["status"] == "CONFIRMED"
    assert order.status == "CONFIRMED"


def test_admin_monthly_stats_rows(make_client):
    rec = Recorder({("GET", "/api/orders/admin/monthly-stats"): [[4, 2024, 2, 300000], [5, 2024, 1, 90000]]})
    stats = AdminOrdersApi(make_client(rec)).monthly_stats()
    assert [(s.month, s.total_orders) for s in stats] == [("4", 2), ("5", 1)]


def test_admin_change_role(make_client):
    rec = Recorder({("PATCH", "/api/admin/users/3/role"): {"id": 3, "email": "x@x.vn", "role": "ADMIN"}})
    user = AdminUsersApi(make_client(rec)).change_role("3", "ADMIN")
    assert user.is_admin
