from collections.abc import Callable
from typing import Any

import flet as ft

from bookstore.domain.catalog_query import BookQuery
from bookstore.ui.state import AppState

# (route, label, icon, selected icon)
ADMIN_NAV: list[tuple[str, str, str, str]] = [
    ("/admin", "Overview", ft.Icons.DASHBOARD_OUTLINED, ft.Icons.DASHBOARD),
    ("/admin/books", "Books", ft.Icons.MENU_BOOK_OUTLINED, ft.Icons.MENU_BOOK),
    ("/admin/authors", "Authors", ft.Icons.PERSON_OUTLINE, ft.Icons.PERSON),
    ("/admin/categories", "Categories", ft.Icons.CATEGORY_OUTLINED, ft.Icons.CATEGORY),
    ("/admin/orders", "Orders", ft.Icons.RECEIPT_LONG_OUTLINED, ft.Icons.RECEIPT_LONG),
    ("/admin/users", "Users", ft.Icons.PEOPLE_OUTLINE, ft.Icons.PEOPLE),
    ("/admin/images", "Images", ft.Icons.PHOTO_LIBRARY_OUTLINED, ft.Icons.PHOTO_LIBRARY),
]


def admin_nav_index(route: str) -> int | None:
    """Index of the admin destination owning `route` (longest prefix wins)."""
    path = route.split("?", 1)[0]
    best: int | None = None
    best_len = -1
    for i, (prefix, *_rest) in enumerate(ADMIN_NAV):
        if (path == prefix or path.startswith(prefix + "/")) and len(prefix) > best_len:
            best, best_len = i, len(prefix)
    return best


def search_route(text: str | None) -> str:
    """Catalogue route for a header search; blank text lists every book."""
    return BookQuery().update(title=(text or "").strip()).route()


def cart_label(count: int) -> str:
    return f"Cart ({count})" if count else "Cart"


class StoreLayout(ft.Column):  # type: ignore
    """
    Storefront chrome: header with navigation, cart and account menu, the
    page content, and a footer.
    """
    def __init__(
        self,
        page: ft.Page,
        app_state: AppState,
        content: ft.Control,
        on_logout: Callable[[], None],
        on_nav: Callable[[str], None],
        toggle_theme: Callable[[], None],
        title: str = "Bookstore",
    ):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.app_state = app_state
        self.on_logout = on_logout
        self.on_nav = on_nav

        self.search = ft.TextField(
            hint_text="Search books...",
            prefix_icon=ft.Icons.SEARCH,
            width=280,
            dense=True,
            border_radius=20,
            on_submit=lambda e: on_nav(search_route(e.control.value)),
        )
        self.cart_button = ft.TextButton(
            cart_label(app_state.cart_count),
            icon=ft.Icons.SHOPPING_CART_OUTLINED,
            on_click=lambda _: on_nav("/cart"),
        )
        app_state.on_cart_change = self.refresh_cart

        user = app_state.current_user
        if user:
            menu_items = [
                ft.PopupMenuItem(text="My orders", icon=ft.Icons.RECEIPT_LONG, on_click=lambda _: on_nav("/orders")),
                ft.PopupMenuItem(text="Profile", icon=ft.Icons.PERSON, on_click=lambda _: on_nav("/profile")),
            ]
            if user.is_admin:
                menu_items.append(
                    ft.PopupMenuItem(text="Admin", icon=ft.Icons.ADMIN_PANEL_SETTINGS, on_click=lambda _: on_nav("/admin"))
                )
            menu_items.append(ft.PopupMenuItem())
            menu_items.append(ft.PopupMenuItem(text="Logout", icon=ft.Icons.LOGOUT, on_click=lambda _: on_logout()))
            account: ft.Control = ft.PopupMenuButton(
                content=ft.Row([ft.Icon(ft.Icons.ACCOUNT_CIRCLE), ft.Text(user.name or user.email)]),
                items=menu_items,
            )
        else:
            account = ft.Row(
                [
                    ft.TextButton("Login", icon=ft.Icons.LOGIN, on_click=lambda _: on_nav("/login")),
                    ft.FilledButton("Register", on_click=lambda _: on_nav("/register")),
                ]
            )

        header = ft.Container(
            content=ft.Row(
                [
                    ft.TextButton(
                        content=ft.Row(
                            [
                                ft.Icon(ft.Icons.AUTO_STORIES, color=ft.Colors.PRIMARY),
                                ft.Text(title, size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.PRIMARY),
                            ]
                        ),
                        on_click=lambda _: on_nav("/"),
                    ),
                    ft.TextButton("Books", on_click=lambda _: on_nav("/books")),
                    ft.Container(expand=True),
                    self.search,
                    ft.IconButton(
                        ft.Icons.DARK_MODE if page.theme_mode == ft.ThemeMode.LIGHT else ft.Icons.LIGHT_MODE,
                        on_click=lambda _: toggle_theme(),
                    ),
                    self.cart_button,
                    account,
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=8),
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        )

        footer = ft.Container(
            content=ft.Text(f"© {title}", size=12, color=ft.Colors.ON_SURFACE_VARIANT),
            padding=12,
            alignment=ft.alignment.center,
        )

        self.controls = [
            header,
            ft.Container(content=content, expand=True, padding=20, alignment=ft.alignment.top_left),
            footer,
        ]

    def refresh_cart(self, count: int) -> None:
        self.cart_button.text = cart_label(count)


class AdminLayout(ft.Row):  # type: ignore
    """Admin console chrome: NavigationRail on the left, content on the right."""
    def __init__(
        self,
        page: ft.Page,
        app_state: AppState,
        content: ft.Control,
        on_logout: Callable[[], None],
        on_nav: Callable[[str], None],
        current_route: str = "/admin",
    ):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.app_state = app_state
        self.on_nav = on_nav

        self.rail = ft.NavigationRail(
            selected_index=admin_nav_index(current_route),
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=100,
            leading=ft.Container(
                content=ft.Icon(ft.Icons.AUTO_STORIES, size=32, color=ft.Colors.PRIMARY),
                padding=20,
            ),
            group_alignment=-0.9,
            destinations=[
                ft.NavigationRailDestination(icon=icon, selected_icon=selected, label=label)
                for _route, label, icon, selected in ADMIN_NAV
            ],
            on_change=self._rail_change,
        )

        user = app_state.current_user
        app_bar = ft.Container(
            content=ft.Row(
                [
                    ft.Text("Admin console", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.PRIMARY),
                    ft.Container(expand=True),
                    ft.TextButton("Storefront", icon=ft.Icons.STOREFRONT, on_click=lambda _: on_nav("/")),
                    ft.PopupMenuButton(
                        icon=ft.Icons.PERSON,
                        tooltip=user.email if user else None,
                        items=[ft.PopupMenuItem(text="Logout", on_click=lambda _: on_logout())],
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        )

        self.controls = [
            self.rail,
            ft.VerticalDivider(width=1),
            ft.Column(
                [
                    app_bar,
                    ft.Container(content=content, expand=True, padding=20, alignment=ft.alignment.top_left),
                ],
                expand=True,
                spacing=0,
            ),
        ]

    def _rail_change(self, e: Any) -> None:
        idx = e.control.selected_index
        if idx is not None and 0 <= idx < len(ADMIN_NAV):
            self.on_nav(ADMIN_NAV[idx][0])
