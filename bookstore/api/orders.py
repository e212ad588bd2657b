from collections.abc import Iterable
from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_list, adapt_order
from bookstore.domain.entities import CartItem, Order, PaymentMethod


def order_payload(
    address: str, payment_method: PaymentMethod, items: Iterable[CartItem]
) -> dict[str, Any]:
    """Backend order request: numeric book ids, shipping address, payment method."""
    return {
        "shippingAddress": address,
        "paymentMethod": payment_method,
        "orderItems": [{"bookId": int(item.id), "quantity": item.quantity} for item in items],
    }


class OrdersApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def create_order(
        self, address: str, payment_method: PaymentMethod, items: Iterable[CartItem]
    ) -> Order:
        data = self.client.post("/orders", order_payload(address, payment_method, items))
        return adapt_order(data)

    def my_orders(self, page: int = 0, size: int = 20) -> list[Order]:
        data = self.client.get("/orders/my-orders", {"page": page, "size": size})
        return adapt_list(data, adapt_order)

    def get_order(self, order_id: str) -> Order:
        return adapt_order(self.client.get(f"/orders/{order_id}"))
