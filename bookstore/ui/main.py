import logging
import os
from pathlib import Path
from typing import Any

import flet as ft

from bookstore.adapters.local_storage import ClientStorageAdapter, create_local_storage
from bookstore.app_shell.admin.authors_admin import AdminAuthorsContent
from bookstore.app_shell.admin.books_admin import AdminBooksContent, BookEditorContent
from bookstore.app_shell.admin.categories_admin import AdminCategoriesContent
from bookstore.app_shell.admin.dashboard import AdminDashboardContent
from bookstore.app_shell.admin.images_admin import AdminImagesContent
from bookstore.app_shell.admin.orders_admin import AdminOrderDetailContent, AdminOrdersContent
from bookstore.app_shell.admin.users_admin import AdminUsersContent
from bookstore.app_shell.cart_page import CartContent, sync_cart_count
from bookstore.app_shell.checkout_page import CheckoutContent
from bookstore.app_shell.config import validate_ops_rules
from bookstore.app_shell.orders_page import OrdersContent
from bookstore.app_shell.profile_page import ProfileContent
from bookstore.app_shell.public_catalog import BookDetailContent, BooksContent
from bookstore.app_shell.public_home import NotFoundContent, PublicHomeContent
from bookstore.app_shell.router import Router
from bookstore.ports.storage import KeyValueStorePort
from bookstore.rules.loader import load_rules, rules_path_from_env
from bookstore.ui.context import DEFAULT_UPLOAD_DIR, ServiceContext
from bookstore.ui.layout import AdminLayout, StoreLayout
from bookstore.ui.state import AppState
from bookstore.ui.theme import AppTheme
from bookstore.ui.views.login import LoginView
from bookstore.ui.views.register import RegisterView

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def storage_for(page: ft.Page) -> KeyValueStorePort:
    """Browser sessions keep their data in localStorage; desktop uses a JSON file."""
    if page.web:
        return ClientStorageAdapter(page.client_storage)
    return create_local_storage()


def main(page: ft.Page) -> None:
    rules_path = rules_path_from_env()
    try:
        rules = load_rules(rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot start: {e}")
        page.add(ft.Text(str(e), color=ft.Colors.RED, size=20))
        return
    logger.info(f"Rules loaded from {rules_path}")

    validate_ops_rules(rules)

    page.title = rules.app.title
    page.theme = AppTheme.light_theme()
    page.dark_theme = AppTheme.dark_theme()
    page.theme_mode = ft.ThemeMode.LIGHT

    ctx = ServiceContext.create(rules, storage_for(page))
    state = AppState()

    state.current_user = ctx.auth_service.restore()
    sync_cart_count(ctx, state)

    def session_expired() -> None:
        ctx.auth_service.clear_session()
        state.logout()

    ctx.client.on_unauthorized = session_expired

    router = Router(page, state)

    # --- Layout Wrapper ---
    def handle_logout() -> None:
        ctx.auth_service.logout()
        state.logout()
        page.go("/")

    def toggle_theme() -> None:
        if page.theme_mode == ft.ThemeMode.LIGHT:
            page.theme_mode = ft.ThemeMode.DARK
        else:
            page.theme_mode = ft.ThemeMode.LIGHT
        page.update()

    def make_view(route: str, content: ft.Control) -> ft.View:
        layout = StoreLayout(
            page=page,
            app_state=state,
            content=content,
            on_logout=handle_logout,
            on_nav=page.go,
            toggle_theme=toggle_theme,
            title=rules.app.title,
        )
        return ft.View(route, [layout], padding=0, scroll=ft.ScrollMode.AUTO)

    def make_admin_view(route: str, content: ft.Control) -> ft.View:
        layout = AdminLayout(
            page=page,
            app_state=state,
            content=content,
            on_logout=handle_logout,
            on_nav=page.go,
            current_route=route,
        )
        return ft.View(route, [layout], padding=0)

    # --- Builders ---

    def home_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/", PublicHomeContent(page, ctx, state))

    def books_builder(_: ft.Page, query: dict[str, str] | None = None, **kwargs: Any) -> ft.View:
        return make_view("/books", BooksContent(page, ctx, state, query))

    def book_detail_builder(_: ft.Page, book_id: str, **kwargs: Any) -> ft.View:
        return make_view(f"/books/{book_id}", BookDetailContent(page, ctx, state, book_id))

    def login_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/login", LoginView(page, ctx, state))

    def register_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/register", RegisterView(page, ctx, state))

    def cart_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/cart", CartContent(page, ctx, state))

    def checkout_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/checkout", CheckoutContent(page, ctx, state))

    def orders_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/orders", OrdersContent(page, ctx, state))

    def profile_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_view("/profile", ProfileContent(page, ctx, state))

    def dashboard_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin", AdminDashboardContent(page, ctx, state))

    def admin_books_builder(_: ft.Page, query: dict[str, str] | None = None, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/books", AdminBooksContent(page, ctx, state, query))

    def book_new_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/books/new", BookEditorContent(page, ctx, state))

    def book_edit_builder(_: ft.Page, book_id: str, **kwargs: Any) -> ft.View:
        return make_admin_view(f"/admin/books/edit/{book_id}", BookEditorContent(page, ctx, state, book_id))

    def admin_orders_builder(_: ft.Page, query: dict[str, str] | None = None, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/orders", AdminOrdersContent(page, ctx, state, query))

    def order_detail_builder(_: ft.Page, order_id: str, **kwargs: Any) -> ft.View:
        return make_admin_view(f"/admin/orders/{order_id}", AdminOrderDetailContent(page, ctx, state, order_id))

    def admin_users_builder(_: ft.Page, query: dict[str, str] | None = None, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/users", AdminUsersContent(page, ctx, state, query))

    def admin_authors_builder(_: ft.Page, query: dict[str, str] | None = None, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/authors", AdminAuthorsContent(page, ctx, state, query))

    def admin_categories_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/categories", AdminCategoriesContent(page, ctx, state))

    def admin_images_builder(_: ft.Page, **kwargs: Any) -> ft.View:
        return make_admin_view("/admin/images", AdminImagesContent(page, ctx, state))

    def not_found_builder(_: ft.Page, route: str) -> ft.View:
        return make_view("/404", NotFoundContent(page, route))

    # --- Register Routes ---

    # Public
    router.register("/", home_builder)
    router.register("/books", books_builder)
    router.register_dynamic(r"^/books/(?P<book_id>[^/]+)$", book_detail_builder)
    router.register("/cart", cart_builder)
    router.register("/login", login_builder, guest_only=True)
    router.register("/register", register_builder, guest_only=True)

    # Signed-in customers
    router.register("/checkout", checkout_builder, protected=True)
    router.register("/orders", orders_builder, protected=True)
    router.register("/profile", profile_builder, protected=True)

    # Admin console
    router.register("/admin", dashboard_builder, admin_only=True)
    router.register("/admin/books", admin_books_builder, admin_only=True)
    router.register("/admin/books/new", book_new_builder, admin_only=True)
    router.register_dynamic(r"^/admin/books/edit/(?P<book_id>[^/]+)$", book_edit_builder, admin_only=True)
    router.register("/admin/orders", admin_orders_builder, admin_only=True)
    router.register_dynamic(r"^/admin/orders/(?P<order_id>[^/]+)$", order_detail_builder, admin_only=True)
    router.register("/admin/users", admin_users_builder, admin_only=True)
    router.register("/admin/authors", admin_authors_builder, admin_only=True)
    router.register("/admin/categories", admin_categories_builder, admin_only=True)
    router.register("/admin/images", admin_images_builder, admin_only=True)

    router.not_found_builder = not_found_builder

    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop

    page.go(page.route or "/")


def run(web: bool = False, port: int = 8550) -> None:
    configure_logging()
    upload_dir = Path(os.environ.get("BOOKSTORE_UPLOAD_DIR", DEFAULT_UPLOAD_DIR))
    upload_dir.mkdir(parents=True, exist_ok=True)
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if web else ft.AppView.FLET_APP,
        port=port,
        upload_dir=str(upload_dir),
    )


if __name__ == "__main__":
    run()
