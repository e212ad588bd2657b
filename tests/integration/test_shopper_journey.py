import pytest

from bookstore.api.client import ApiError, UnauthorizedError
from bookstore.domain.catalog_query import BookQuery
from bookstore.services.auth import TOKEN_KEY
from bookstore.services.checkout import EmptyCartError
from bookstore.ui.context import ServiceContext

CHECKOUT = {
    "customer_name": "Tran Thi B",
    "email": "b@example.com",
    "phone": "0912345678",
    "address": "12 Hang Bai, Hanoi",
    "payment_method": "COD",
}


def test_browse_register_buy_and_track(ctx: ServiceContext, backend):
    # 1. Anonymous browsing
    latest = ctx.books.latest(ctx.rules.home.latest_limit)
    assert [b.title for b in latest][:1] == ["Cho Toi Xin Mot Ve"]

    q = BookQuery.from_query_string("title=mat")
    page = ctx.books.list_books(q.api_page, q.limit, q.api_filters())
    assert [b.title for b in page.data] == ["Mat Biec"]
    mat_biec = page.data[0]

    # 2. Cart works before signing in
    change = ctx.cart_service.add(mat_biec, 2)
    assert change.ok
    assert not ctx.cart_service.add(ctx.books.get_book("3"), 1).ok  # out of stock

    # 3. Register, then sign in
    assert ctx.auth_service.register("Tran Thi B", "b@example.com", "secret1")
    assert ctx.auth_service.token is None
    user = ctx.auth_service.login("b@example.com", "secret1")
    assert user.role == "USER"
    assert user.name == "Tran Thi B"

    # 4. Checkout
    form = ctx.checkout_service.validate({**ctx.checkout_service.prefill(user), **CHECKOUT})
    order = ctx.checkout_service.place_order(form)
    assert order.status == "PENDING"
    assert order.total_amount == 2 * 85000
    assert ctx.cart_service.is_empty
    assert backend.state.store.books[1]["stockQuantity"] == 8

    with pytest.raises(EmptyCartError):
        ctx.checkout_service.place_order(form)

    # 5. Order history
    orders = ctx.orders.my_orders()
    assert [o.id for o in orders] == [order.id]
    assert orders[0].items[0].book.title == "Mat Biec"


def test_ordering_more_than_stock_is_refused_by_backend(ctx: ServiceContext, backend):
    ctx.auth_service.register("Le C", "c@example.com", "secret1")
    ctx.auth_service.login("c@example.com", "secret1")
    ctx.cart_service.add(ctx.books.get_book("2"), 2)
    # Someone else bought a copy meanwhile
    backend.state.store.books[2]["stockQuantity"] = 1

    with pytest.raises(ApiError, match="Insufficient stock"):
        ctx.checkout_service.place_order(ctx.checkout_service.validate(CHECKOUT))

    assert not ctx.cart_service.is_empty


def test_profile_update_round_trips_name(ctx: ServiceContext):
    ctx.auth_service.register("Pham D", "d@example.com", "secret1")
    ctx.auth_service.login("d@example.com", "secret1")

    updated = ctx.users.update_profile("Pham Van D", "Hue", "0987654321")
    ctx.auth_service.update_user(updated)

    assert ctx.auth_service.current_user.name == "Pham Van D"
    assert ctx.users.me().address == "Hue"


def test_wrong_password(ctx: ServiceContext):
    with pytest.raises(UnauthorizedError, match="Invalid username or password"):
        ctx.auth_service.login("admin", "nope")


def test_session_restore_and_expiry(ctx: ServiceContext, storage):
    ctx.auth_service.login("admin", "admin123")

    fresh = ServiceContext.create(ctx.rules, storage, http=ctx.client.http)
    assert fresh.auth_service.restore().is_admin

    storage.set(TOKEN_KEY, "garbage-token")
    again = ServiceContext.create(ctx.rules, storage, http=ctx.client.http)
    assert again.auth_service.restore() is None
    assert storage.get(TOKEN_KEY) is None


def test_unauthorized_response_clears_session(ctx: ServiceContext, storage):
    storage.set(TOKEN_KEY, "garbage-token")

    with pytest.raises(UnauthorizedError):
        ctx.orders.my_orders()

    assert storage.get(TOKEN_KEY) is None
