import pytest

from bookstore.domain.entities import Order
from bookstore.domain.order_flow import (
    can_transition,
    next_statuses,
    split_by_transition,
    status_color,
    status_label,
    transition,
)


@pytest.mark.parametrize(
    "current,new",
    [
        ("PENDING", "CONFIRMED"),
        ("PENDING", "CANCELLED"),
        ("CONFIRMED", "SHIPPED"),
        ("CONFIRMED", "CANCELLED"),
        ("SHIPPED", "DELIVERED"),
    ],
)
def test_allowed_transitions(current, new):
    assert can_transition(current, new)


@pytest.mark.parametrize(
    "current,new",
    [
        ("PENDING", "SHIPPED"),
        ("SHIPPED", "CANCELLED"),
        ("DELIVERED", "PENDING"),
        ("CANCELLED", "CONFIRMED"),
        ("PENDING", "PENDING"),
    ],
)
def test_rejected_transitions(current, new):
    assert not can_transition(current, new)


def test_final_states_have_no_next_status():
    assert next_statuses("DELIVERED") == []
    assert next_statuses("CANCELLED") == []
    assert next_statuses("PENDING") == ["CONFIRMED", "CANCELLED"]


def test_transition_returns_new_order():
    order = Order(id="7", status="PENDING")

    moved = transition(order, "CONFIRMED")

    assert moved.status == "CONFIRMED"
    assert order.status == "PENDING"


def test_transition_invalid_raises():
    with pytest.raises(ValueError, match="Invalid transition"):
        transition(Order(id="7", status="DELIVERED"), "CANCELLED")


def test_labels_and_colors():
    assert status_label("SHIPPED") == "Shipping"
    assert status_label("UNKNOWN") == "UNKNOWN"
    assert status_color("DELIVERED") == "green"
    assert status_color("UNKNOWN") == "grey"


def test_split_by_transition_keeps_final_orders_out():
    orders = [
        Order(id="1", status="PENDING"),
        Order(id="2", status="DELIVERED"),
        Order(id="3", status="CONFIRMED"),
        Order(id="4", status="CANCELLED"),
    ]

    movable, skipped = split_by_transition(orders, "CANCELLED")

    assert [o.id for o in movable] == ["1", "3"]
    assert [o.id for o in skipped] == ["2", "4"]
