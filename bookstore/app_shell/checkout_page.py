import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.app_shell.cart_page import sync_cart_count
from bookstore.domain.forms import field_errors
from bookstore.domain.formatting import format_currency
from bookstore.services.checkout import EmptyCartError
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

PAYMENT_LABELS = {
    "COD": "Cash on delivery",
    "ONLINE": "Online payment",
}


def CheckoutContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    checkout = ctx.checkout_service
    try:
        checkout.ensure_not_empty()
    except EmptyCartError as e:
        show_toast(page, str(e), "error")
        page.go("/books")
        return ft.Container()

    values = checkout.prefill(state.current_user)
    fields: dict[str, ft.TextField] = {
        "customer_name": ft.TextField(label="Full name", value=values.get("customer_name", "")),
        "email": ft.TextField(label="Email", value=values.get("email", "")),
        "phone": ft.TextField(label="Phone", value=values.get("phone", ""), keyboard_type=ft.KeyboardType.PHONE),
        "address": ft.TextField(label="Shipping address", value=values.get("address", ""), multiline=True),
        "note": ft.TextField(label="Note (optional)", multiline=True),
    }
    payment = ft.RadioGroup(
        value=values.get("payment_method", "COD"),
        content=ft.Column(
            [
                ft.Radio(value=m, label=PAYMENT_LABELS.get(m, m))
                for m in ctx.rules.checkout.payment_methods
            ]
        ),
    )
    submit_button = ft.FilledButton("Place order", icon=ft.Icons.CHECK)

    def place_order(_: ft.ControlEvent) -> None:
        for f in fields.values():
            f.error_text = None
        data = {name: f.value or "" for name, f in fields.items()}
        data["payment_method"] = payment.value or "COD"

        try:
            form = checkout.validate(data)
        except ValidationError as exc:
            for name, message in field_errors(exc).items():
                if name in fields:
                    fields[name].error_text = message
            page.update()
            return
        except ValueError as e:
            show_toast(page, str(e), "error")
            return

        submit_button.disabled = True
        page.update()
        try:
            order = checkout.place_order(form)
        except EmptyCartError as e:
            show_toast(page, str(e), "error")
            page.go("/books")
            return
        except ValueError as e:
            logger.error(f"Cart cannot be sent as an order: {e}")
            show_toast(page, "Your cart contains an unknown book. Please remove it and try again.", "error")
            submit_button.disabled = False
            page.update()
            return
        except ApiError as e:
            logger.error(f"Order placement failed: {e}")
            show_toast(page, str(e), "error")
            submit_button.disabled = False
            page.update()
            return

        sync_cart_count(ctx, state)
        show_toast(page, f"Order #{order.id} placed. Thank you!", "success")
        page.go("/orders")

    submit_button.on_click = place_order

    items = ctx.cart_service.items
    totals = ctx.cart_service.totals()
    summary = ft.Column(
        [
            ft.Text("Order summary", size=20, weight=ft.FontWeight.BOLD),
            *[
                ft.Row(
                    [ft.Text(f"{i.title} x {i.quantity}", expand=True), ft.Text(format_currency(i.subtotal))]
                )
                for i in items
            ],
            ft.Divider(),
            ft.Row(
                [
                    ft.Text("Total", weight=ft.FontWeight.BOLD, expand=True),
                    ft.Text(format_currency(totals.total_amount), weight=ft.FontWeight.BOLD, size=18),
                ]
            ),
        ],
        width=340,
    )

    return ft.Column(
        [
            ft.Text("Checkout", size=28, weight=ft.FontWeight.BOLD),
            ft.Divider(),
            ft.Row(
                [
                    ft.Column(
                        [
                            ft.Text("Shipping details", size=20, weight=ft.FontWeight.BOLD),
                            *fields.values(),
                            ft.Text("Payment method", weight=ft.FontWeight.BOLD),
                            payment,
                            submit_button,
                        ],
                        expand=True,
                        spacing=10,
                    ),
                    summary,
                ],
                vertical_alignment=ft.CrossAxisAlignment.START,
                spacing=30,
            ),
        ],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
