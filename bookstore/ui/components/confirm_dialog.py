from collections.abc import Callable

import flet as ft


def confirm(
    page: ft.Page,
    title: str,
    message: str,
    on_yes: Callable[[], None],
    confirm_text: str = "Delete",
) -> None:
    dialog = ft.AlertDialog(modal=True, title=ft.Text(title), content=ft.Text(message))

    def yes(_: ft.ControlEvent) -> None:
        page.close(dialog)
        on_yes()

    dialog.actions = [
        ft.TextButton("Cancel", on_click=lambda _: page.close(dialog)),
        ft.FilledButton(confirm_text, on_click=yes),
    ]
    page.open(dialog)
