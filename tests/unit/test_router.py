from types import SimpleNamespace
from unittest.mock import Mock

import flet as ft
import pytest

from bookstore.app_shell.router import Router, reload_route, route_with_query, split_route
from bookstore.domain.entities import User
from bookstore.ui.state import AppState

CUSTOMER = User(id="1", email="c@x.vn", name="C", role="USER")
ADMIN = User(id="2", email="a@x.vn", name="A", role="ADMIN")


@pytest.fixture
def page():
    p = Mock()
    p.views = []
    p.route = "/"
    return p


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def router(page, state):
    r = Router(page, state)
    r.register("/", lambda p, **kw: ft.View("/"))
    r.register("/books", lambda p, query=None, **kw: ft.View("/books", [ft.Text(str(query))]))
    r.register_dynamic(r"^/books/(?P<book_id>[^/]+)$", lambda p, book_id, **kw: ft.View(f"/books/{book_id}"))
    r.register("/login", lambda p, **kw: ft.View("/login"), guest_only=True)
    r.register("/orders", lambda p, **kw: ft.View("/orders"), protected=True)
    r.register("/admin", lambda p, **kw: ft.View("/admin"), admin_only=True)
    return r


def navigate(router: Router, route: str) -> None:
    router.handle_route_change(SimpleNamespace(route=route))


def test_split_route():
    assert split_route("/books?page=2&title=a") == ("/books", {"page": "2", "title": "a"})
    assert split_route("/books/") == ("/books", {})
    assert split_route("") == ("/", {})


def test_route_with_query():
    assert route_with_query("/admin/books", {"page": 2, "title": None, "inStock": ""}) == "/admin/books?page=2"
    assert route_with_query("/admin/books", {}) == "/admin/books"


def test_exact_route_receives_query(router, page):
    navigate(router, "/books?page=2")

    assert len(page.views) == 1
    view = page.views[0]
    assert view.route == "/books"
    assert view.controls[0].value == "{'page': '2'}"
    page.update.assert_called()


def test_dynamic_route_passes_named_groups(router, page):
    navigate(router, "/books/42")
    assert page.views[0].route == "/books/42"


def test_unknown_route_renders_not_found(router, page):
    navigate(router, "/nowhere")
    assert page.views[0].route == "/404"


def test_custom_not_found_builder(router, page):
    router.not_found_builder = lambda p, route: ft.View("/missing", [ft.Text(route)])
    navigate(router, "/nowhere")
    assert page.views[0].route == "/missing"
    assert page.views[0].controls[0].value == "/nowhere"


def test_protected_route_redirects_anonymous_and_remembers(router, page, state):
    navigate(router, "/orders?page=1")

    page.go.assert_called_once_with("/login")
    assert state.redirect_to == "/orders?page=1"
    assert page.views == []


def test_admin_route_redirects_anonymous_to_login(router, page, state):
    navigate(router, "/admin")
    page.go.assert_called_once_with("/login")
    assert state.redirect_to == "/admin"


def test_admin_route_redirects_customer_home(router, page, state):
    state.current_user = CUSTOMER
    navigate(router, "/admin")
    page.go.assert_called_once_with("/")


def test_admin_route_allows_admin(router, page, state):
    state.current_user = ADMIN
    navigate(router, "/admin")
    page.go.assert_not_called()
    assert page.views[0].route == "/admin"


def test_guest_only_route_redirects_signed_in_user(router, page, state):
    state.current_user = CUSTOMER
    navigate(router, "/login")
    page.go.assert_called_once_with("/")


def test_builder_failure_renders_error_view(router, page):
    def broken(p, **kw):
        raise RuntimeError("backend exploded")

    router.register("/broken", broken)
    navigate(router, "/broken")

    assert page.views[0].route == "/error"


def test_view_pop(router, page):
    page.views.extend([ft.View("/books"), ft.View("/books/1")])
    router.view_pop(page.views[-1])
    page.go.assert_called_once_with("/books")


def test_reload_route(page):
    page.route = "/admin/books?page=2"
    reload_route(page)
    page.go.assert_called_once_with("/admin/books?page=2")
