import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.app_shell.router import reload_route, route_with_query
from bookstore.domain.entities import ORDER_STATUSES, Order, OrderStatus, Page
from bookstore.domain.formatting import format_currency, format_datetime
from bookstore.domain.order_flow import can_transition, next_statuses, split_by_transition, status_label
from bookstore.ui.components.confirm_dialog import confirm
from bookstore.ui.components.pagination import Pagination
from bookstore.ui.components.status_badge import StatusBadge
from bookstore.ui.components.toast import ToastLevel, show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

ADMIN_ORDERS_ROUTE = "/admin/orders"

ACTION_LABELS: dict[OrderStatus, str] = {
    "CONFIRMED": "Confirm",
    "SHIPPED": "Mark shipped",
    "DELIVERED": "Mark delivered",
    "CANCELLED": "Cancel order",
}


def bulk_status_message(
    updated: int, skipped: int, failed: int, target: OrderStatus
) -> tuple[str, ToastLevel]:
    """Toast text and level summarising a bulk status change."""
    parts = [f"Updated {updated} order(s) to {status_label(target)}."]
    if skipped:
        parts.append(f"Skipped {skipped} that cannot move to {status_label(target)}.")
    if failed:
        parts.append(f"{failed} failed.")

    level: ToastLevel = "success"
    if failed:
        level = "error"
    elif skipped or not updated:
        level = "warning"
    return " ".join(parts), level


def AdminOrdersContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, query: dict[str, str] | None = None
) -> ft.Control:
    query = dict(query or {})
    try:
        current_page = max(0, int(query.get("page", "1")) - 1)
    except ValueError:
        current_page = 0
    status_filter = query.get("status") if query.get("status") in ORDER_STATUSES else None

    def go(**changes: object) -> None:
        params: dict[str, object] = {**query, **changes}
        if "page" not in changes:
            params["page"] = None
        page.go(route_with_query(ADMIN_ORDERS_ROUTE, params))

    result: Page[Order] = Page()
    try:
        result = ctx.admin_orders.list_orders(
            page=current_page,
            size=ctx.rules.pagination.admin_page_size,
            status=status_filter,  # type: ignore[arg-type]
            user_email=query.get("email"),
        )
    except ApiError as e:
        logger.error(f"Failed to list orders: {e}")
        show_toast(page, str(e), "error")

    selected: set[str] = set()
    bulk_status = ft.Dropdown(
        label="Set status",
        width=180,
        options=[ft.dropdown.Option(s, status_label(s)) for s in ORDER_STATUSES],
        disabled=True,
    )
    bulk_apply = ft.OutlinedButton("Apply", icon=ft.Icons.DONE_ALL, disabled=True)

    def toggle(order_id: str, checked: bool) -> None:
        if checked:
            selected.add(order_id)
        else:
            selected.discard(order_id)
        bulk_status.disabled = bulk_apply.disabled = not selected
        page.update()

    def apply_bulk(_: ft.ControlEvent) -> None:
        target = bulk_status.value
        if not target:
            show_toast(page, "Choose a status first.", "warning")
            return
        chosen = [o for o in result.data if o.id in selected]
        movable, skipped = split_by_transition(chosen, target)  # type: ignore[arg-type]

        updated = failed = 0
        for order in movable:
            try:
                ctx.admin_orders.update_status(order.id, target)  # type: ignore[arg-type]
                updated += 1
            except ApiError as e:
                logger.warning(f"Order {order.id}: status change to {target} failed: {e}")
                failed += 1

        text, level = bulk_status_message(updated, len(skipped), failed, target)  # type: ignore[arg-type]
        show_toast(page, text, level)
        if updated:
            reload_route(page)

    bulk_apply.on_click = apply_bulk

    email = ft.TextField(
        label="Customer email",
        value=query.get("email", ""),
        prefix_icon=ft.Icons.SEARCH,
        width=260,
        on_submit=lambda e: go(email=e.control.value),
    )
    chips = ft.Row(
        [
            ft.Chip(
                label=ft.Text("All"),
                selected=status_filter is None,
                on_select=lambda _: go(status=None),
            )
        ]
        + [
            ft.Chip(
                label=ft.Text(status_label(s)),
                selected=status_filter == s,
                on_select=lambda _, st=s: go(status=st),
            )
            for s in ORDER_STATUSES
        ],
        wrap=True,
    )

    rows = [
        ft.DataRow(
            cells=[
                ft.DataCell(ft.Checkbox(on_change=lambda e, oid=o.id: toggle(oid, bool(e.control.value)))),
                ft.DataCell(ft.Text(f"#{o.id}")),
                ft.DataCell(ft.Text(o.customer_name or o.email or "-")),
                ft.DataCell(ft.Text(format_datetime(o.created_at))),
                ft.DataCell(ft.Text(format_currency(o.total_amount))),
                ft.DataCell(StatusBadge(o.status)),
                ft.DataCell(
                    ft.IconButton(
                        ft.Icons.VISIBILITY,
                        tooltip="Details",
                        on_click=lambda _, oid=o.id: page.go(f"/admin/orders/{oid}"),
                    )
                ),
            ]
        )
        for o in result.data
    ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Text("Orders", size=24, weight=ft.FontWeight.BOLD),
                ft.Row([email, bulk_status, bulk_apply], wrap=True),
                chips,
                ft.Text(f"{result.total_items} order(s)", color=ft.Colors.ON_SURFACE_VARIANT),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("")),
                        ft.DataColumn(ft.Text("Order")),
                        ft.DataColumn(ft.Text("Customer")),
                        ft.DataColumn(ft.Text("Placed")),
                        ft.DataColumn(ft.Text("Total"), numeric=True),
                        ft.DataColumn(ft.Text("Status")),
                        ft.DataColumn(ft.Text("")),
                    ],
                    rows=rows,
                ),
                Pagination(result.current_page, result.total_pages, on_page_change=lambda n: go(page=n + 1)),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )


def _info_row(label: str, value: str) -> ft.Control:
    return ft.Row(
        [
            ft.Text(label, width=140, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(value or "-", selectable=True, expand=True),
        ]
    )


def AdminOrderDetailContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, order_id: str
) -> ft.Control:
    back = ft.TextButton(
        "Back to orders", icon=ft.Icons.ARROW_BACK, on_click=lambda _: page.go(ADMIN_ORDERS_ROUTE)
    )
    try:
        order = ctx.admin_orders.get(order_id)
    except ApiError as e:
        logger.error(f"Failed to load order {order_id}: {e}")
        show_toast(page, str(e), "error")
        return ft.Container(ft.Column([back, ft.Text("Order not found.", size=20)]), padding=20)

    def change_status(new_status: OrderStatus) -> None:
        if not can_transition(order.status, new_status):
            show_toast(page, f"Cannot move an order from {status_label(order.status)} to {status_label(new_status)}.", "error")
            return

        def run() -> None:
            try:
                ctx.admin_orders.update_status(order.id, new_status)
            except ApiError as e:
                show_toast(page, str(e), "error")
                return
            logger.info(f"Order {order.id}: {order.status} -> {new_status}")
            show_toast(page, f"Order is now {status_label(new_status)}.", "success")
            reload_route(page)

        if new_status == "CANCELLED":
            confirm(page, "Cancel order", f"Cancel order #{order.id}?", run, confirm_text="Cancel order")
        else:
            run()

    actions = [
        (ft.OutlinedButton if s == "CANCELLED" else ft.FilledButton)(
            ACTION_LABELS.get(s, status_label(s)),
            on_click=lambda _, st=s: change_status(st),
        )
        for s in next_statuses(order.status)
    ]

    items = ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Book")),
            ft.DataColumn(ft.Text("Price"), numeric=True),
            ft.DataColumn(ft.Text("Qty"), numeric=True),
            ft.DataColumn(ft.Text("Subtotal"), numeric=True),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(it.book.title)),
                    ft.DataCell(ft.Text(format_currency(it.price))),
                    ft.DataCell(ft.Text(str(it.quantity))),
                    ft.DataCell(ft.Text(format_currency(it.subtotal))),
                ]
            )
            for it in order.items
        ],
    )

    return ft.Container(
        content=ft.Column(
            [
                back,
                ft.Row(
                    [
                        ft.Text(f"Order #{order.id}", size=24, weight=ft.FontWeight.BOLD),
                        StatusBadge(order.status),
                    ],
                    spacing=16,
                ),
                ft.Divider(),
                _info_row("Customer", order.customer_name),
                _info_row("Email", order.email),
                _info_row("Phone", order.phone),
                _info_row("Shipping address", order.address),
                _info_row("Payment", order.payment_method),
                _info_row("Placed", format_datetime(order.created_at)),
                _info_row("Note", order.note),
                ft.Divider(),
                items,
                ft.Row(
                    [ft.Text(f"Total: {format_currency(order.total_amount)}", size=18, weight=ft.FontWeight.BOLD)],
                    alignment=ft.MainAxisAlignment.END,
                ),
                ft.Row(actions) if actions else ft.Text("This order is closed.", italic=True),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )
