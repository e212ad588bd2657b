import logging
from typing import Any

import flet as ft

from bookstore.api.client import ApiError
from bookstore.domain.entities import Book, MonthlyStat, Order, OrderStatistics, OverviewStats
from bookstore.domain.formatting import format_currency, format_datetime
from bookstore.domain.order_flow import STATUS_COLORS, STATUS_LABELS
from bookstore.ui.components.card import HoverCard, stat_card
from bookstore.ui.components.status_badge import StatusBadge
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

RECENT_ORDERS = 5
TOP_BESTSELLERS = 5

# matplotlib colour names matching the status badges
_CHART_COLORS = {
    "amber": "#ffc107",
    "blue": "#2196f3",
    "indigo": "#3f51b5",
    "green": "#4caf50",
    "red": "#f44336",
}


def order_status_chart_spec(stats: OrderStatistics) -> dict[str, Any]:
    counts = stats.by_status()
    return {
        "type": "pie",
        "title": "Orders by status",
        "data": {
            "x": [STATUS_LABELS[s] for s in counts],
            "y": list(counts.values()),
        },
        "colors": [_CHART_COLORS[STATUS_COLORS[s]] for s in counts],
    }


def monthly_revenue_chart_spec(months: list[MonthlyStat]) -> dict[str, Any]:
    return {
        "type": "line",
        "title": "Monthly revenue (delivered orders)",
        "data": {
            "x": [f"{m.month}/{m.year}" for m in months],
            "y": [m.total_revenue for m in months],
        },
        "xlabel": "Month",
        "ylabel": "Revenue",
    }


def _chart(ctx: ServiceContext, spec: dict[str, Any]) -> ft.Control:
    return HoverCard(
        content=ft.Image(src_base64=ctx.renderer.render_base64(spec), fit=ft.ImageFit.CONTAIN),
        width=480,
        padding=8,
    )


def AdminDashboardContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    overview = OverviewStats()
    recent: list[Order] = []
    bestsellers: list[Book] = []
    months: list[MonthlyStat] = []

    try:
        overview = ctx.admin.overview()
        recent = ctx.admin_orders.list_orders(page=0, size=RECENT_ORDERS).data
        bestsellers = ctx.admin.bestsellers(TOP_BESTSELLERS)
        months = ctx.admin_orders.monthly_stats()
    except ApiError as e:
        logger.error(f"Failed to load dashboard: {e}")
        show_toast(page, str(e), "error")

    orders = overview.orders
    cards = ft.Row(
        [
            stat_card("Books", str(overview.total_books), ft.Icons.MENU_BOOK, ft.Colors.BLUE),
            stat_card("Available", str(overview.available_books), ft.Icons.INVENTORY, ft.Colors.TEAL),
            stat_card("Categories", str(overview.total_categories), ft.Icons.CATEGORY, ft.Colors.PURPLE),
            stat_card("Authors", str(overview.total_authors), ft.Icons.PERSON, ft.Colors.BROWN),
            stat_card("Orders", str(orders.total_orders), ft.Icons.RECEIPT_LONG, ft.Colors.INDIGO),
            stat_card("Pending", str(orders.pending_orders), ft.Icons.HOURGLASS_TOP, ft.Colors.AMBER),
            stat_card("Delivered", str(orders.delivered_orders), ft.Icons.LOCAL_SHIPPING, ft.Colors.GREEN),
            stat_card("Cancelled", str(orders.cancelled_orders), ft.Icons.CANCEL, ft.Colors.RED),
            stat_card("Revenue", format_currency(overview.total_revenue), ft.Icons.PAYMENTS, ft.Colors.GREEN_900),
        ],
        wrap=True,
        spacing=12,
        run_spacing=12,
    )

    recent_table = ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Order")),
            ft.DataColumn(ft.Text("Customer")),
            ft.DataColumn(ft.Text("Date")),
            ft.DataColumn(ft.Text("Total"), numeric=True),
            ft.DataColumn(ft.Text("Status")),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(f"#{o.id}")),
                    ft.DataCell(ft.Text(o.customer_name or o.email)),
                    ft.DataCell(ft.Text(format_datetime(o.created_at))),
                    ft.DataCell(ft.Text(format_currency(o.total_amount))),
                    ft.DataCell(StatusBadge(o.status)),
                ],
                on_select_changed=lambda _, oid=o.id: page.go(f"/admin/orders/{oid}"),
            )
            for o in recent
        ],
    )

    bestseller_list = ft.Column(
        [
            ft.ListTile(
                leading=ft.Text(f"{i + 1}", size=18, weight=ft.FontWeight.BOLD),
                title=ft.Text(b.title),
                subtitle=ft.Text(f"{b.author} · {format_currency(b.price)}"),
            )
            for i, b in enumerate(bestsellers)
        ]
    )

    return ft.Container(
        content=ft.Column(
            [
                ft.Text("Overview", size=28, weight=ft.FontWeight.BOLD, color=ft.Colors.PRIMARY),
                ft.Divider(),
                cards,
                ft.Row(
                    [
                        _chart(ctx, order_status_chart_spec(orders)),
                        _chart(ctx, monthly_revenue_chart_spec(months)),
                    ],
                    wrap=True,
                ),
                ft.Row(
                    [
                        ft.Column(
                            [ft.Text("Recent orders", size=20, weight=ft.FontWeight.BOLD), recent_table],
                            expand=2,
                        ),
                        ft.Column(
                            [ft.Text("Best sellers", size=20, weight=ft.FontWeight.BOLD), bestseller_list],
                            expand=1,
                        ),
                    ],
                    vertical_alignment=ft.CrossAxisAlignment.START,
                ),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )
