import flet as ft

from bookstore.domain.order_flow import status_color, status_label


def StatusBadge(status: str) -> ft.Control:
    color = status_color(status)
    return ft.Container(
        content=ft.Text(status_label(status), size=12, color=f"{color}900"),
        bgcolor=f"{color}100",
        padding=ft.padding.symmetric(horizontal=8, vertical=3),
        border_radius=10,
    )
