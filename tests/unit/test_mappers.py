import pytest

from bookstore.api import mappers
from bookstore.api.client import ApiError
from tests.fakes.data import book_json


def test_adapt_book_nested_relations():
    book = mappers.adapt_book(book_json(7))

    assert book.id == "7"
    assert book.author == "Nguyen Nhat Anh"
    assert book.category.id == "2"
    assert book.category.name == "Novels"
    assert book.quantity == 4
    assert book.images == ["http://api.test/uploads/7.jpg"]
    assert book.cover == "http://api.test/uploads/7.jpg"


def test_adapt_book_flattened_relations():
    raw = book_json(
        8,
        author=None,
        authorName="To Hoai",
        category=None,
        categoryId=5,
        categoryName="Kids",
        imageUrl=None,
        stockQuantity=None,
        quantity=0,
    )

    book = mappers.adapt_book(raw)

    assert book.author == "To Hoai"
    assert book.category.id == "5"
    assert book.category.name == "Kids"
    assert book.images == []
    assert not book.in_stock


def test_adapt_book_string_author_and_image_list():
    book = mappers.adapt_book(book_json(9, author="Plain Name", images=["a.jpg", "b.jpg"]))
    assert book.author == "Plain Name"
    assert book.images == ["a.jpg", "b.jpg"]


def test_roles():
    assert mappers.to_role("CUSTOMER") == "USER"
    assert mappers.to_role(None) == "USER"
    assert mappers.to_role("ADMIN") == "ADMIN"
    assert mappers.to_role("MANAGER") == "ADMIN"
    assert mappers.to_backend_role("USER") == "CUSTOMER"
    assert mappers.to_backend_role("ADMIN") == "ADMIN"


def test_adapt_user_joins_name_parts():
    user = mappers.adapt_user(
        {"id": 4, "email": "a@x.vn", "firstName": "Nguyen", "lastName": "Van A", "role": "CUSTOMER"}
    )
    assert user.id == "4"
    assert user.name == "Nguyen Van A"
    assert user.role == "USER"
    assert user.enabled


def test_adapt_user_falls_back_to_username():
    user = mappers.adapt_user({"id": 1, "email": "admin@x.vn", "username": "admin", "role": "ADMIN"})
    assert user.name == "admin"
    assert user.is_admin


def test_adapt_auth_response():
    auth = mappers.adapt_auth_response({"token": "t", "id": 1, "email": "e@x.vn", "username": "e", "role": "ADMIN"})
    assert auth.token == "t"
    assert auth.user.is_admin


@pytest.mark.parametrize("body", ["<html>login</html>", None, [1, 2]])
def test_entity_bodies_must_be_objects(body):
    with pytest.raises(ApiError, match="unexpected response"):
        mappers.adapt_user(body)
    with pytest.raises(ApiError):
        mappers.adapt_auth_response(body)


def test_auth_response_without_token_is_rejected():
    with pytest.raises(ApiError):
        mappers.adapt_auth_response({"id": 1, "email": "e@x.vn"})


def test_adapt_order():
    order = mappers.adapt_order(
        {
            "id": 11,
            "userName": "Tran B",
            "userEmail": "b@x.vn",
            "status": "SHIPPED",
            "totalAmount": "250000",
            "shippingAddress": "Hanoi",
            "paymentMethod": "COD",
            "orderDate": "2024-05-02T09:00:00",
            "orderItems": [
                {"bookId": 1, "bookTitle": "Book 1", "quantity": 2, "price": 100000},
                {"bookId": 2, "bookTitle": "Book 2", "price": 50000},
            ],
        }
    )
    assert order.id == "11"
    assert order.status == "SHIPPED"
    assert order.total_amount == 250000
    assert order.customer_name == "Tran B"
    assert order.user is not None and order.user.email == "b@x.vn"
    assert order.item_count == 3
    assert order.items[0].subtotal == 200000
    assert order.created_at == "2024-05-02T09:00:00"


def test_adapt_order_unknown_status_defaults_to_pending():
    assert mappers.adapt_order({"id": 1, "status": "LOST"}).status == "PENDING"


def test_adapt_page_spring_shape():
    page = mappers.adapt_page(
        {"content": [book_json(1), book_json(2)], "totalElements": 14, "totalPages": 2, "number": 1},
        mappers.adapt_book,
    )
    assert [b.id for b in page.data] == ["1", "2"]
    assert (page.total_items, page.total_pages, page.current_page) == (14, 2, 1)


def test_adapt_page_bare_list_and_garbage():
    page = mappers.adapt_page([book_json(1)], mappers.adapt_book)
    assert (page.total_items, page.total_pages, page.current_page) == (1, 1, 0)
    assert mappers.adapt_page(None, mappers.adapt_book).data == []


def test_adapt_list_accepts_page_or_list():
    assert len(mappers.adapt_list({"content": [book_json(1)]}, mappers.adapt_book)) == 1
    assert len(mappers.adapt_list([book_json(1), book_json(2)], mappers.adapt_book)) == 2
    assert mappers.adapt_list("oops", mappers.adapt_book) == []


def test_adapt_overview_nested_counters():
    stats = mappers.adapt_overview(
        {
            "books": {"total": 40, "available": 35},
            "categories": {"total": 6},
            "authors": {"total": 12},
            "orders": {"total": 9, "pending": 2, "delivered": 5, "cancelled": 1},
            "totalRevenue": 1500000,
        }
    )
    assert stats.total_books == 40
    assert stats.available_books == 35
    assert stats.total_categories == 6
    assert stats.total_authors == 12
    assert stats.orders.by_status()["DELIVERED"] == 5
    assert stats.total_revenue == 1500000


def test_adapt_monthly_stat_rows():
    from_row = mappers.adapt_monthly_stat([5, 2024, 3, 450000.0])
    from_obj = mappers.adapt_monthly_stat({"month": "5", "year": 2024, "totalOrders": 3, "totalRevenue": 450000})
    assert from_row == from_obj
    short = mappers.adapt_monthly_stat([6])
    assert (short.month, short.year, short.total_orders) == ("6", 0, 0)


def test_adapt_revenue():
    rev = mappers.adapt_revenue({"periodRevenue": 10, "monthlyRevenue": {"2024-05": "7.5"}})
    assert rev.total_revenue == 10
    assert rev.monthly_revenue == {"2024-05": 7.5}
