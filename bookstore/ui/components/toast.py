from typing import Literal

import flet as ft

ToastLevel = Literal["success", "error", "warning", "info"]

TOAST_COLORS: dict[str, str] = {
    "success": ft.Colors.GREEN_700,
    "error": ft.Colors.RED_700,
    "warning": ft.Colors.AMBER_800,
    "info": ft.Colors.BLUE_GREY_700,
}


def show_toast(page: ft.Page, message: str, level: ToastLevel = "info") -> None:
    page.open(
        ft.SnackBar(
            ft.Text(message, color=ft.Colors.WHITE),
            bgcolor=TOAST_COLORS.get(level, TOAST_COLORS["info"]),
        )
    )
