from collections.abc import Callable
from typing import Any

import flet as ft

from bookstore.domain.entities import Category


def FilterSidebar(
    categories: list[Category],
    filters: dict[str, str],
    on_filter_change: Callable[[dict[str, Any]], None],
) -> ft.Control:
    """
    Title search, category radio list and price range for the catalogue.
    Emits only the keys that changed; the caller merges them into the query.
    """
    title_field = ft.TextField(
        label="Search by title",
        value=filters.get("title", ""),
        prefix_icon=ft.Icons.SEARCH,
        on_submit=lambda e: on_filter_change({"title": e.control.value}),
    )

    category_group = ft.RadioGroup(
        value=filters.get("category", ""),
        content=ft.Column(
            [ft.Radio(value="", label="All")]
            + [ft.Radio(value=c.id, label=c.name) for c in categories],
            spacing=0,
        ),
        on_change=lambda e: on_filter_change({"category": e.control.value}),
    )

    min_price = ft.TextField(
        label="Min", value=filters.get("minPrice", ""), width=110,
        keyboard_type=ft.KeyboardType.NUMBER,
    )
    max_price = ft.TextField(
        label="Max", value=filters.get("maxPrice", ""), width=110,
        keyboard_type=ft.KeyboardType.NUMBER,
    )

    def apply_price(_: ft.ControlEvent) -> None:
        on_filter_change({
            "minPrice": (min_price.value or "").strip(),
            "maxPrice": (max_price.value or "").strip(),
        })

    def clear(_: ft.ControlEvent) -> None:
        on_filter_change({key: None for key in ("title", "category", "minPrice", "maxPrice")})

    return ft.Container(
        content=ft.Column(
            [
                title_field,
                ft.Text("Categories", weight=ft.FontWeight.BOLD),
                category_group,
                ft.Divider(),
                ft.Text("Price range", weight=ft.FontWeight.BOLD),
                ft.Row([min_price, max_price]),
                ft.OutlinedButton("Apply price", on_click=apply_price),
                ft.TextButton("Clear filters", icon=ft.Icons.CLEAR, on_click=clear),
            ],
            spacing=8,
            scroll=ft.ScrollMode.AUTO,
        ),
        width=260,
        padding=12,
    )
