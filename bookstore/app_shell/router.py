import logging
import re
from collections.abc import Callable
from typing import Any, NamedTuple
from urllib.parse import parse_qsl, urlencode, urlsplit

import flet as ft

from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


class RouteConfig(NamedTuple):
    # builder(page, query=dict, **path_params) -> ft.View
    builder: Callable[..., ft.View]
    protected: bool = False
    admin_only: bool = False
    # Login/register: signed-in users are sent home
    guest_only: bool = False


def split_route(route: str) -> tuple[str, dict[str, str]]:
    """'/books?page=2' -> ('/books', {'page': '2'})"""
    parts = urlsplit(route or "/")
    path = parts.path or "/"
    if len(path) > 1:
        path = path.rstrip("/")
    return path, dict(parse_qsl(parts.query))


class Router:
    def __init__(self, page: ft.Page, state: AppState):
        self.page = page
        self.state = state
        self.routes: dict[str, RouteConfig] = {}
        self.dynamic_routes: dict[str, RouteConfig] = {}
        self.not_found_builder: Callable[[ft.Page, str], ft.View] | None = None

    def register(
        self,
        route: str,
        builder: Callable[..., ft.View],
        protected: bool = False,
        admin_only: bool = False,
        guest_only: bool = False,
    ) -> None:
        self.routes[route] = RouteConfig(builder, protected, admin_only, guest_only)

    def register_dynamic(
        self,
        pattern: str,
        builder: Callable[..., ft.View],
        protected: bool = False,
        admin_only: bool = False,
    ) -> None:
        """Register a regex route. Named groups are passed to the builder as kwargs.
        Example: '^/books/(?P<book_id>[^/]+)$'
        """
        self.dynamic_routes[pattern] = RouteConfig(builder, protected, admin_only)

    def resolve(self, path: str) -> tuple[RouteConfig | None, dict[str, str]]:
        config = self.routes.get(path)
        if config:
            return config, {}
        for pattern, dyn_config in self.dynamic_routes.items():
            match = re.match(pattern, path)
            if match:
                return dyn_config, match.groupdict()
        return None, {}

    def guard(self, route: str, config: RouteConfig) -> str | None:
        """Return the redirect target when the current user may not open `route`."""
        user = self.state.current_user
        if (config.protected or config.admin_only) and user is None:
            self.state.remember(route)
            return "/login"
        if config.admin_only and user is not None and not user.is_admin:
            return "/"
        if config.guest_only and user is not None:
            return "/"
        return None

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or "/"
        logger.info(f"Navigate to: {route}")
        path, query = split_route(route)

        config, kwargs = self.resolve(path)
        if not config:
            logger.warning(f"No route found for: {route}")
            self._show(self._not_found_view(route))
            return

        redirect = self.guard(route, config)
        if redirect:
            logger.info(f"Access to {route} denied. Redirecting to {redirect}.")
            self.page.go(redirect)
            return

        try:
            view = config.builder(self.page, query=query, **kwargs)
        except Exception as err:
            logger.exception(f"Error building view for {route}: {err}")
            view = ft.View(
                "/error",
                [
                    ft.Icon(ft.Icons.ERROR_OUTLINE, size=48, color=ft.Colors.ERROR),
                    ft.Text("Something went wrong while loading this page.", size=18),
                    ft.Text(str(err), color=ft.Colors.ON_SURFACE_VARIANT),
                    ft.TextButton("Back to home", on_click=lambda _: self.page.go("/")),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                vertical_alignment=ft.MainAxisAlignment.CENTER,
            )
        self._show(view)

    def _not_found_view(self, route: str) -> ft.View:
        if self.not_found_builder:
            return self.not_found_builder(self.page, route)
        return ft.View(
            "/404",
            [ft.Text("404", size=48), ft.Text(f"Page not found: {route}")],
        )

    def _show(self, view: ft.View) -> None:
        self.page.views.clear()
        self.page.views.append(view)
        self.page.update()

    def view_pop(self, view: ft.View) -> None:
        if len(self.page.views) > 1:
            self.page.views.pop()
            self.page.go(self.page.views[-1].route)
        else:
            self.page.go("/")


def route_with_query(path: str, query: dict[str, Any]) -> str:
    clean = {k: v for k, v in query.items() if v is not None and v != ""}
    return f"{path}?{urlencode(clean)}" if clean else path


def reload_route(page: ft.Page) -> None:
    """Rebuild the current view (page.go always fires on_route_change)."""
    page.go(page.route or "/")
