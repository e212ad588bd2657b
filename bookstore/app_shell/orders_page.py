import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.domain.entities import Order
from bookstore.domain.formatting import format_currency, format_datetime
from bookstore.ui.components.status_badge import StatusBadge
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def _order_card(order: Order) -> ft.Control:
    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text(f"Order #{order.id}", weight=ft.FontWeight.BOLD),
                        ft.Text(format_datetime(order.created_at), color=ft.Colors.ON_SURFACE_VARIANT),
                        StatusBadge(order.status),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                *[
                    ft.Row(
                        [
                            ft.Text(f"{item.book.title} x {item.quantity}", expand=True),
                            ft.Text(format_currency(item.subtotal)),
                        ]
                    )
                    for item in order.items
                ],
                ft.Divider(height=1),
                ft.Row(
                    [
                        ft.Text(f"Ship to: {order.address}", expand=True, color=ft.Colors.ON_SURFACE_VARIANT),
                        ft.Text(
                            f"Total: {format_currency(order.total_amount)}",
                            weight=ft.FontWeight.BOLD,
                        ),
                    ]
                ),
            ],
            spacing=6,
        ),
        padding=14,
        border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
        border_radius=10,
    )


def OrdersContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    orders: list[Order] = []
    try:
        orders = ctx.orders.my_orders(size=ctx.rules.pagination.orders_page_size)
    except ApiError as e:
        logger.error(f"Failed to load orders: {e}")
        show_toast(page, str(e), "error")

    if orders:
        body: list[ft.Control] = [_order_card(o) for o in orders]
    else:
        body = [
            ft.Text("You have no orders yet."),
            ft.FilledButton("Start shopping", on_click=lambda _: page.go("/books")),
        ]

    return ft.Column(
        [ft.Text("My orders", size=28, weight=ft.FontWeight.BOLD), ft.Divider(), *body],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
        spacing=12,
    )
