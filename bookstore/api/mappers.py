"""
Backend response normalisation.

The backend answers in Spring Boot shapes (camelCase, numeric ids, nested or
flattened relations, `content`/`totalElements` pages). These helpers turn the
raw JSON into domain entities and tolerate every variant the backend emits.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from bookstore.api.client import ApiError
from bookstore.domain.entities import (
    ORDER_STATUSES,
    Author,
    AuthorStatistics,
    AuthResponse,
    Book,
    BookStatistics,
    Category,
    DashboardStats,
    ImageInfo,
    MonthlyStat,
    Order,
    OrderItem,
    OrderStatistics,
    OverviewStats,
    Page,
    RevenueStatistics,
    RoleType,
    User,
    UserStatistics,
)

T = TypeVar("T")

Json = dict[str, Any]

UNEXPECTED_RESPONSE_MESSAGE = "The server sent an unexpected response."


def _first(data: Json, *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def require_object(data: Any) -> Json:
    """The body must be a JSON object; anything else is a malformed response."""
    if not isinstance(data, dict):
        raise ApiError(UNEXPECTED_RESPONSE_MESSAGE, payload=data)
    return data


def _str_id(value: Any) -> str:
    return "" if value is None else str(value)


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _now_iso() -> str:
    return datetime.now().isoformat()


def to_role(backend_role: Any) -> RoleType:
    """Backend CUSTOMER is a storefront USER; every other named role is ADMIN."""
    if backend_role in (None, "", "CUSTOMER", "USER"):
        return "USER"
    return "ADMIN"


def to_backend_role(role: RoleType) -> str:
    return "CUSTOMER" if role == "USER" else "ADMIN"


def adapt_category(c: Json) -> Category:
    return Category(
        id=_str_id(_first(c, "_id", "id", default="")),
        name=c.get("name") or "",
        description=c.get("description") or "",
        created_at=_str_id(c.get("createdAt") or ""),
        updated_at=_str_id(c.get("updatedAt") or ""),
    )


def adapt_book(b: Json) -> Book:
    b = require_object(b)
    raw_author = b.get("author")
    if isinstance(raw_author, str):
        author = raw_author
    elif isinstance(raw_author, dict):
        author = raw_author.get("name") or ""
    else:
        author = b.get("authorName") or ""

    raw_category = b.get("category")
    if isinstance(raw_category, dict):
        category = adapt_category(raw_category)
    else:
        category = Category(
            id=_str_id(b.get("categoryId") or ""),
            name=b.get("categoryName") or "",
        )

    images = b.get("images")
    if images is None:
        images = [b["imageUrl"]] if b.get("imageUrl") else []

    return Book(
        id=_str_id(_first(b, "id", "_id", default="")),
        title=b.get("title") or "",
        author=author,
        description=b.get("description") or "",
        price=_number(b.get("price")),
        quantity=int(_first(b, "stockQuantity", "quantity", default=0)),
        category=category,
        images=list(images),
        created_at=_str_id(b.get("createdAt") or ""),
        updated_at=_str_id(b.get("updatedAt") or ""),
    )


def adapt_author(a: Json) -> Author:
    return Author(
        id=_str_id(_first(a, "id", "_id", default="")),
        name=a.get("name") or "",
        biography=_first(a, "biography", "bio", default=""),
        birth_date=_str_id(a["birthDate"]) if a.get("birthDate") else None,
        nationality=a.get("nationality"),
        image_url=a.get("imageUrl"),
        books_count=_first(a, "booksCount", "bookCount"),
        created_at=_str_id(a.get("createdAt") or ""),
        updated_at=_str_id(a.get("updatedAt") or ""),
    )


def adapt_user(u: Json) -> User:
    u = require_object(u)
    first, last = u.get("firstName"), u.get("lastName")
    if first is not None or last is not None:
        name = f"{first or ''} {last or ''}".strip()
    else:
        name = u.get("name") or u.get("username") or ""

    return User(
        id=_str_id(_first(u, "id", "_id", default="")),
        email=u.get("email") or "",
        name=name,
        username=u.get("username"),
        address=u.get("address"),
        phone=u.get("phone"),
        role=to_role(u.get("role")),
        enabled=bool(u.get("enabled", True)),
        created_at=_str_id(u.get("createdAt") or _now_iso()),
        updated_at=_str_id(u.get("updatedAt") or _now_iso()),
    )


def adapt_auth_response(r: Json) -> AuthResponse:
    """JWT login response: the token plus the flattened user fields."""
    r = require_object(r)
    if not r.get("token"):
        raise ApiError(UNEXPECTED_RESPONSE_MESSAGE, payload=r)
    return AuthResponse(token=r["token"], user=adapt_user(r))


def adapt_order_item(it: Json) -> OrderItem:
    price = _number(it.get("price"))
    image = it.get("bookImageUrl")
    book = Book(
        id=_str_id(it.get("bookId") or ""),
        title=it.get("bookTitle") or "",
        author=it.get("bookAuthor") or "",
        price=price,
        images=[image] if image else [],
    )
    return OrderItem(book=book, quantity=int(it.get("quantity") or 1), price=price)


def adapt_order(o: Json) -> Order:
    o = require_object(o)
    status = o.get("status") or "PENDING"
    if status not in ORDER_STATUSES:
        status = "PENDING"

    user = None
    if o.get("userEmail") or o.get("userName"):
        user = User(id="", email=o.get("userEmail") or "", name=o.get("userName") or "")

    return Order(
        id=_str_id(_first(o, "id", "_id", default="")),
        user=user,
        items=[adapt_order_item(it) for it in _first(o, "orderItems", "items", default=[])],
        total_amount=_number(o.get("totalAmount")),
        customer_name=_first(o, "userName", "userFullName", default=""),
        address=o.get("shippingAddress") or "",
        phone=o.get("phone") or "",
        email=o.get("userEmail") or "",
        status=status,
        payment_method=o.get("paymentMethod") or "",
        note=o.get("note") or "",
        created_at=_str_id(_first(o, "orderDate", "createdAt", default="")),
        updated_at=_str_id(o.get("updatedAt") or ""),
    )


def adapt_image(i: Json) -> ImageInfo:
    return ImageInfo(
        filename=i.get("filename") or "",
        url=i.get("url") or "",
        size=int(i.get("size") or 0),
        last_modified=_str_id(i.get("lastModified") or ""),
    )


def adapt_page(data: Any, item_adapter: Callable[[Json], T]) -> Page[T]:
    """
    Spring page -> Page. A bare list is treated as a single complete page.
    """
    if isinstance(data, list):
        items = [item_adapter(x) for x in data]
        return Page(data=items, total_pages=1 if items else 0, current_page=0,
                    total_items=len(items))
    if not isinstance(data, dict):
        return Page()
    return Page(
        data=[item_adapter(x) for x in data.get("content") or []],
        total_items=data.get("totalElements") or 0,
        total_pages=data.get("totalPages") or 0,
        current_page=data.get("number") or 0,
    )


def adapt_list(data: Any, item_adapter: Callable[[Json], T]) -> list[T]:
    """Accept either a JSON list or a Spring page and return its items."""
    if isinstance(data, list):
        return [item_adapter(x) for x in data]
    if isinstance(data, dict) and isinstance(data.get("content"), list):
        return [item_adapter(x) for x in data["content"]]
    return []


# --- Admin statistics ---

def adapt_order_statistics(s: Json) -> OrderStatistics:
    return OrderStatistics(
        total_orders=int(s.get("totalOrders") or 0),
        pending_orders=int(s.get("pendingOrders") or 0),
        confirmed_orders=int(s.get("confirmedOrders") or 0),
        shipped_orders=int(s.get("shippedOrders") or 0),
        delivered_orders=int(s.get("deliveredOrders") or 0),
        cancelled_orders=int(s.get("cancelledOrders") or 0),
        total_revenue=_number(s.get("totalRevenue")),
    )


def adapt_overview(o: Json) -> OverviewStats:
    """/admin/overview nests its counters per resource."""
    books = o.get("books") or {}
    orders = o.get("orders") or {}
    return OverviewStats(
        total_books=int(books.get("total") or 0),
        available_books=int(books.get("available") or 0),
        total_categories=int((o.get("categories") or {}).get("total") or 0),
        total_authors=int((o.get("authors") or {}).get("total") or 0),
        orders=OrderStatistics(
            total_orders=int(orders.get("total") or 0),
            pending_orders=int(orders.get("pending") or 0),
            confirmed_orders=int(orders.get("confirmed") or 0),
            shipped_orders=int(orders.get("shipped") or 0),
            delivered_orders=int(orders.get("delivered") or 0),
            cancelled_orders=int(orders.get("cancelled") or 0),
            total_revenue=_number(o.get("totalRevenue")),
        ),
        total_revenue=_number(o.get("totalRevenue")),
    )


def adapt_dashboard(d: Json) -> DashboardStats:
    return DashboardStats(
        total_books=int(d.get("totalBooks") or 0),
        available_books=int(d.get("availableBooks") or 0),
        total_categories=int(d.get("totalCategories") or 0),
        total_authors=int(d.get("totalAuthors") or 0),
        order_statistics=adapt_order_statistics(d.get("orderStatistics") or {}),
        total_revenue=_number(d.get("totalRevenue")),
    )


def adapt_book_statistics(s: Json) -> BookStatistics:
    return BookStatistics(
        total_books=int(s.get("totalBooks") or 0),
        available_books=int(s.get("availableBooks") or 0),
        out_of_stock_books=int(s.get("outOfStockBooks") or 0),
    )


def adapt_user_statistics(s: Json) -> UserStatistics:
    return UserStatistics(
        total_users=int(s.get("totalUsers") or 0),
        active_users=int(s.get("activeUsers") or 0),
        admin_users=int(s.get("adminUsers") or 0),
        customer_users=int(s.get("customerUsers") or 0),
    )


def adapt_author_statistics(s: Json) -> AuthorStatistics:
    return AuthorStatistics(
        total_authors=int(s.get("totalAuthors") or 0),
        authors_with_books=int(s.get("authorsWithBooks") or 0),
        authors_without_books=int(s.get("authorsWithoutBooks") or 0),
    )


def adapt_monthly_stat(row: Any) -> MonthlyStat:
    """
    Monthly rows arrive either as objects or as raw query tuples
    `[month, year, orderCount, revenue]`.
    """
    if isinstance(row, dict):
        return MonthlyStat(
            month=_str_id(row.get("month") or ""),
            year=int(row.get("year") or 0),
            total_orders=int(row.get("totalOrders") or 0),
            total_revenue=_number(row.get("totalRevenue")),
        )
    month, year, count, revenue = (list(row) + [None] * 4)[:4]
    return MonthlyStat(
        month=_str_id(month),
        year=int(year or 0),
        total_orders=int(count or 0),
        total_revenue=_number(revenue),
    )


def adapt_revenue(r: Json) -> RevenueStatistics:
    monthly = r.get("monthlyRevenue") or {}
    return RevenueStatistics(
        total_revenue=_number(_first(r, "totalRevenue", "periodRevenue")),
        monthly_revenue={str(k): _number(v) for k, v in monthly.items()},
    )
