from typing import Any

import flet as ft


class HoverCard(ft.Container):  # type: ignore
    """
    Rounded surface card with a hover lift. Used for book tiles and stat cards.
    """
    def __init__(
        self,
        content: ft.Control,
        width: float | None = None,
        height: float | None = None,
        padding: float = 16,
        on_click: Any | None = None,
        expand: bool | int = False,
    ):
        super().__init__(
            content=content,
            width=width,
            height=height,
            padding=padding,
            border_radius=ft.border_radius.all(12),
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
            animate=ft.animation.Animation(200, ft.AnimationCurve.EASE_OUT),
            on_hover=self._on_hover,
            on_click=on_click,
            expand=expand,
            shadow=ft.BoxShadow(
                spread_radius=0,
                blur_radius=8,
                color="#1A000000",
                offset=ft.Offset(0, 3),
            ),
        )
        self.scale = 1.0

    def _on_hover(self, e: ft.HoverEvent) -> None:
        lifted = e.data == "true"
        self.scale = 1.02 if lifted else 1.0
        self.shadow.blur_radius = 18 if lifted else 8
        self.shadow.offset = ft.Offset(0, 6) if lifted else ft.Offset(0, 3)
        self.update()


def stat_card(label: str, value: str, icon: str, color: str) -> ft.Control:
    return HoverCard(
        content=ft.Column(
            [
                ft.Icon(name=icon, size=28, color=color),
                ft.Text(value, size=24, weight=ft.FontWeight.BOLD),
                ft.Text(label, size=13, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=4,
        ),
        width=170,
        height=140,
    )
