from collections.abc import Callable
from dataclasses import dataclass

from bookstore.domain.entities import User


@dataclass
class AppState:
    current_user: User | None = None
    # Route intercepted by the login guard; login sends the user back there
    redirect_to: str | None = None
    cart_count: int = 0
    on_cart_change: Callable[[int], None] | None = None

    @property
    def is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.is_admin

    def logout(self) -> None:
        self.current_user = None
        self.redirect_to = None

    def remember(self, route: str) -> None:
        self.redirect_to = route

    def take_redirect(self, default: str = "/") -> str:
        target = self.redirect_to or default
        self.redirect_to = None
        return target

    def set_cart_count(self, count: int) -> None:
        self.cart_count = count
        if self.on_cart_change:
            self.on_cart_change(count)
