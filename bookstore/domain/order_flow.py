from collections.abc import Iterable

from bookstore.domain.entities import ORDER_STATUSES, Order, OrderStatus

_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    "PENDING": ("CONFIRMED", "CANCELLED"),
    "CONFIRMED": ("SHIPPED", "CANCELLED"),
    "SHIPPED": ("DELIVERED",),
    "DELIVERED": (),
    "CANCELLED": (),
}

STATUS_LABELS: dict[OrderStatus, str] = {
    "PENDING": "Pending",
    "CONFIRMED": "Confirmed",
    "SHIPPED": "Shipping",
    "DELIVERED": "Delivered",
    "CANCELLED": "Cancelled",
}

# Flet colour names used for status badges
STATUS_COLORS: dict[OrderStatus, str] = {
    "PENDING": "amber",
    "CONFIRMED": "blue",
    "SHIPPED": "indigo",
    "DELIVERED": "green",
    "CANCELLED": "red",
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """
    Determine if an admin may move an order from `current` to `new`.
    Delivered and cancelled orders are final.
    """
    return new in _TRANSITIONS.get(current, ())


def next_statuses(current: OrderStatus) -> list[OrderStatus]:
    return list(_TRANSITIONS.get(current, ()))


def transition(order: Order, new_status: OrderStatus) -> Order:
    """
    Return a NEW Order with the updated status.
    Raises ValueError if the transition is invalid.
    """
    if not can_transition(order.status, new_status):
        raise ValueError(f"Invalid transition from {order.status} to {new_status}")
    return order.model_copy(update={"status": new_status})


def status_label(status: str) -> str:
    if status in ORDER_STATUSES:
        return STATUS_LABELS[status]  # type: ignore[index]
    return status


def status_color(status: str) -> str:
    if status in ORDER_STATUSES:
        return STATUS_COLORS[status]  # type: ignore[index]
    return "grey"


def split_by_transition(
    orders: Iterable[Order], new_status: OrderStatus
) -> tuple[list[Order], list[Order]]:
    """Partition orders into (movable, skipped) for a bulk status change."""
    movable: list[Order] = []
    skipped: list[Order] = []
    for order in orders:
        (movable if can_transition(order.status, new_status) else skipped).append(order)
    return movable, skipped
