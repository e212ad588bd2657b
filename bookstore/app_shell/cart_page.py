import flet as ft

from bookstore.domain.cart import CartChange
from bookstore.domain.entities import Book, CartItem
from bookstore.domain.formatting import format_currency
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState


def sync_cart_count(ctx: ServiceContext, state: AppState) -> None:
    state.set_cart_count(ctx.cart_service.totals().total_items)


def report(page: ft.Page, change: CartChange) -> None:
    if change.message:
        show_toast(page, change.message, "error" if not change.ok else "success")


def add_to_cart(
    page: ft.Page, ctx: ServiceContext, state: AppState, book: Book, quantity: int = 1
) -> CartChange:
    change = ctx.cart_service.add(book, quantity)
    report(page, change)
    sync_cart_count(ctx, state)
    page.update()
    return change


def CartContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    body = ft.Column(spacing=12)

    def refresh() -> None:
        render()
        sync_cart_count(ctx, state)
        page.update()

    def set_quantity(item: CartItem, quantity: int) -> None:
        report(page, ctx.cart_service.update_quantity(item.id, quantity))
        refresh()

    def remove(item: CartItem) -> None:
        report(page, ctx.cart_service.remove(item.id))
        refresh()

    def line(item: CartItem) -> ft.Control:
        return ft.Container(
            content=ft.Row(
                [
                    ft.Image(
                        src=item.image or "",
                        width=60,
                        height=80,
                        fit=ft.ImageFit.COVER,
                        error_content=ft.Icon(ft.Icons.MENU_BOOK),
                    ),
                    ft.Column(
                        [
                            ft.TextButton(item.title, on_click=lambda _: page.go(f"/books/{item.id}")),
                            ft.Text(format_currency(item.price), color=ft.Colors.ON_SURFACE_VARIANT),
                        ],
                        expand=True,
                    ),
                    ft.IconButton(
                        ft.Icons.REMOVE,
                        on_click=lambda _: set_quantity(item, item.quantity - 1),
                    ),
                    ft.Text(str(item.quantity), width=30, text_align=ft.TextAlign.CENTER),
                    ft.IconButton(
                        ft.Icons.ADD,
                        disabled=item.quantity >= item.stock,
                        on_click=lambda _: set_quantity(item, item.quantity + 1),
                    ),
                    ft.Text(format_currency(item.subtotal), width=120, text_align=ft.TextAlign.RIGHT),
                    ft.IconButton(ft.Icons.DELETE_OUTLINE, tooltip="Remove", on_click=lambda _: remove(item)),
                ],
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=10,
            border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            border_radius=8,
        )

    def render() -> None:
        items = ctx.cart_service.items
        if not items:
            body.controls = [
                ft.Icon(ft.Icons.REMOVE_SHOPPING_CART, size=64, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text("Your cart is empty.", size=18),
                ft.FilledButton("Browse books", on_click=lambda _: page.go("/books")),
            ]
            return

        totals = ctx.cart_service.totals()
        body.controls = [
            *[line(item) for item in items],
            ft.Divider(),
            ft.Row(
                [
                    ft.TextButton("Clear cart", icon=ft.Icons.DELETE_SWEEP, on_click=lambda _: clear()),
                    ft.Column(
                        [
                            ft.Text(f"Items: {totals.total_items}"),
                            ft.Text(
                                f"Total: {format_currency(totals.total_amount)}",
                                size=20,
                                weight=ft.FontWeight.BOLD,
                            ),
                            ft.FilledButton(
                                "Proceed to checkout",
                                icon=ft.Icons.PAYMENT,
                                on_click=lambda _: page.go("/checkout"),
                            ),
                        ],
                        horizontal_alignment=ft.CrossAxisAlignment.END,
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
        ]

    def clear() -> None:
        ctx.cart_service.clear()
        show_toast(page, "Cart cleared.", "info")
        refresh()

    render()
    return ft.Column(
        [ft.Text("Shopping cart", size=28, weight=ft.FontWeight.BOLD), ft.Divider(), body],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
