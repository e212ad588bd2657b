import logging
from typing import Any

from bookstore.api.orders import OrdersApi
from bookstore.domain.entities import Order, User
from bookstore.domain.forms import CheckoutForm
from bookstore.rules.models import CheckoutRules
from bookstore.services.cart import CartService

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    def __init__(self) -> None:
        super().__init__("Your cart is empty.")


class CheckoutService:
    def __init__(self, cart: CartService, orders_api: OrdersApi, rules: CheckoutRules):
        self.cart = cart
        self.orders_api = orders_api
        self.rules = rules

    def prefill(self, user: User | None) -> dict[str, Any]:
        if user is None:
            return {"payment_method": "COD"}
        return {
            "customer_name": user.name,
            "email": user.email,
            "phone": user.phone or "",
            "address": user.address or "",
            "payment_method": "COD",
        }

    def validate(self, data: dict[str, Any]) -> CheckoutForm:
        """Raises pydantic.ValidationError with user-facing messages."""
        form = CheckoutForm.model_validate(
            data, context={"phone_pattern": self.rules.phone_pattern}
        )
        if form.payment_method not in self.rules.payment_methods:
            raise ValueError(f"Payment method {form.payment_method} is not available")
        return form

    def ensure_not_empty(self) -> None:
        if self.cart.is_empty:
            raise EmptyCartError()

    def place_order(self, form: CheckoutForm) -> Order:
        self.ensure_not_empty()
        order = self.orders_api.create_order(form.address, form.payment_method, self.cart.items)
        logger.info(f"Order {order.id} placed with {len(self.cart.items)} line(s)")
        self.cart.clear()
        return order
