from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from bookstore.adapters.render.chart_renderer import ChartRenderer
from bookstore.api.admin import AdminApi
from bookstore.api.admin_authors import AdminAuthorsApi
from bookstore.api.admin_books import AdminBooksApi
from bookstore.api.admin_orders import AdminOrdersApi
from bookstore.api.admin_users import AdminUsersApi
from bookstore.api.auth import AuthApi
from bookstore.api.authors import AuthorsApi
from bookstore.api.books import BooksApi
from bookstore.api.categories import CategoriesApi
from bookstore.api.client import ApiClient
from bookstore.api.orders import OrdersApi
from bookstore.api.uploads import UploadsApi
from bookstore.api.users import UsersApi
from bookstore.app_shell.rate_limit import RateLimiter
from bookstore.ports.storage import KeyValueStorePort
from bookstore.rules.models import Rules
from bookstore.services.auth import TOKEN_KEY, AuthService
from bookstore.services.cart import CartService
from bookstore.services.checkout import CheckoutService
from bookstore.services.images import ImageService

DEFAULT_UPLOAD_DIR = "./data/uploads"


@dataclass
class ServiceContext:
    rules: Rules
    storage: KeyValueStorePort
    client: ApiClient
    auth_api: AuthApi
    books: BooksApi
    categories: CategoriesApi
    authors: AuthorsApi
    orders: OrdersApi
    users: UsersApi
    uploads: UploadsApi
    admin: AdminApi
    admin_books: AdminBooksApi
    admin_authors: AdminAuthorsApi
    admin_orders: AdminOrdersApi
    admin_users: AdminUsersApi
    auth_service: AuthService
    cart_service: CartService
    checkout_service: CheckoutService
    image_service: ImageService
    rate_limiter: RateLimiter
    renderer: ChartRenderer
    upload_dir: str = DEFAULT_UPLOAD_DIR

    @classmethod
    def create(
        cls,
        rules: Rules,
        storage: KeyValueStorePort,
        http: httpx.Client | None = None,
        upload_dir: str | None = None,
    ) -> ServiceContext:
        client = ApiClient(
            rules.api.base_url,
            token_provider=lambda: storage.get(TOKEN_KEY),
            timeout=rules.api.timeout_seconds,
            http=http,
        )

        auth_api = AuthApi(client)
        users = UsersApi(client)
        orders = OrdersApi(client)
        uploads = UploadsApi(client)
        rate_limiter = RateLimiter(rules.rate_limits)

        auth_service = AuthService(storage, auth_api, users, rate_limiter)
        # A 401 anywhere means the stored session is no longer valid
        client.on_unauthorized = auth_service.clear_session

        cart_service = CartService(storage, rules.cart.storage_key)
        checkout_service = CheckoutService(cart_service, orders, rules.checkout)
        image_service = ImageService(
            uploads,
            rules.uploads,
            rate_limiter,
            user_id=lambda: auth_service.current_user.id if auth_service.current_user else None,
        )

        return cls(
            rules=rules,
            storage=storage,
            client=client,
            auth_api=auth_api,
            books=BooksApi(client),
            categories=CategoriesApi(client),
            authors=AuthorsApi(client),
            orders=orders,
            users=users,
            uploads=uploads,
            admin=AdminApi(client),
            admin_books=AdminBooksApi(client),
            admin_authors=AdminAuthorsApi(client),
            admin_orders=AdminOrdersApi(client),
            admin_users=AdminUsersApi(client),
            auth_service=auth_service,
            cart_service=cart_service,
            checkout_service=checkout_service,
            image_service=image_service,
            rate_limiter=rate_limiter,
            renderer=ChartRenderer(),
            upload_dir=upload_dir or os.environ.get("BOOKSTORE_UPLOAD_DIR", DEFAULT_UPLOAD_DIR),
        )
