from types import SimpleNamespace
from unittest.mock import Mock

from bookstore.domain.entities import User
from bookstore.ui.layout import (
    ADMIN_NAV,
    AdminLayout,
    StoreLayout,
    admin_nav_index,
    cart_label,
    search_route,
)
from bookstore.ui.state import AppState
from bookstore.ui.theme import AppTheme

ADMIN = User(id="1", email="a@x.vn", name="Admin", role="ADMIN")


def test_app_theme_modes():
    light = AppTheme.light_theme()
    assert light.color_scheme.primary == AppTheme.primary_light

    dark = AppTheme.dark_theme()
    assert dark.color_scheme.primary == AppTheme.primary_dark


def test_app_state_logout():
    state = AppState(current_user=ADMIN, redirect_to="/orders")
    assert state.is_admin

    state.logout()

    assert state.current_user is None
    assert state.redirect_to is None
    assert not state.is_admin


def test_take_redirect_is_one_shot():
    state = AppState()
    state.remember("/checkout")
    assert state.take_redirect() == "/checkout"
    assert state.take_redirect() == "/"
    assert state.take_redirect("/admin") == "/admin"


def test_cart_count_notifies_listener():
    listener = Mock()
    state = AppState(on_cart_change=listener)
    state.set_cart_count(3)
    assert state.cart_count == 3
    listener.assert_called_once_with(3)


def test_cart_label():
    assert cart_label(0) == "Cart"
    assert cart_label(4) == "Cart (4)"


def test_admin_nav_index_longest_prefix():
    assert admin_nav_index("/admin") == 0
    assert admin_nav_index("/admin/books") == 1
    assert admin_nav_index("/admin/books/edit/3") == 1
    assert admin_nav_index("/admin/orders/9?x=1") == 4
    assert admin_nav_index("/admin/bookshelf") == 0
    assert admin_nav_index("/books") is None


def test_admin_rail_navigates():
    on_nav = Mock()
    layout = AdminLayout(
        page=Mock(),
        app_state=AppState(current_user=ADMIN),
        content=None,
        on_logout=Mock(),
        on_nav=on_nav,
        current_route="/admin/users",
    )
    assert layout.rail.selected_index == 5

    layout._rail_change(SimpleNamespace(control=SimpleNamespace(selected_index=2)))

    on_nav.assert_called_once_with(ADMIN_NAV[2][0])


def test_search_route():
    assert search_route("mat biec") == "/books?title=mat+biec"
    assert search_route("  toi  ") == "/books?title=toi"
    assert search_route("") == "/books"
    assert search_route(None) == "/books"


def test_header_search_opens_catalogue():
    on_nav = Mock()
    layout = StoreLayout(
        page=Mock(),
        app_state=AppState(),
        content=None,
        on_logout=Mock(),
        on_nav=on_nav,
        toggle_theme=Mock(),
    )

    layout.search.on_submit(SimpleNamespace(control=SimpleNamespace(value="Hoa Vang")))

    on_nav.assert_called_once_with("/books?title=Hoa+Vang")
