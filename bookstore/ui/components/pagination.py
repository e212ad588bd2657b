from collections.abc import Callable

import flet as ft

from bookstore.domain.catalog_query import page_window


def Pagination(
    current_page: int,
    total_pages: int,
    on_page_change: Callable[[int], None],
    max_pages: int = 5,
) -> ft.Control:
    """
    Page buttons for a 0-indexed backend page. `on_page_change` receives the
    0-indexed target page.
    """
    window = page_window(current_page, total_pages, max_pages)
    if not window:
        return ft.Container()

    def go(target: int) -> Callable[[ft.ControlEvent], None]:
        return lambda _: on_page_change(target)

    buttons: list[ft.Control] = [
        ft.IconButton(
            ft.Icons.CHEVRON_LEFT,
            disabled=current_page <= 0,
            on_click=go(current_page - 1),
        )
    ]
    for number in window:
        if number == current_page:
            buttons.append(ft.FilledButton(str(number + 1)))
        else:
            buttons.append(ft.OutlinedButton(str(number + 1), on_click=go(number)))
    buttons.append(
        ft.IconButton(
            ft.Icons.CHEVRON_RIGHT,
            disabled=current_page >= total_pages - 1,
            on_click=go(current_page + 1),
        )
    )
    return ft.Row(buttons, alignment=ft.MainAxisAlignment.CENTER, wrap=True)
