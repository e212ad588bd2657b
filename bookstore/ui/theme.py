import flet as ft


class AppTheme:
    """
    Centralized theme configuration for the storefront and admin console.
    Warm paper tones with a deep green accent.
    """

    font_family = "Inter"

    # Colors - Light
    primary_light = "#1f5f4a"
    on_primary_light = "#ffffff"
    secondary_light = "#c0843d"
    surface_light = "#fffdf8"
    error_light = "#c0392b"

    # Colors - Dark
    primary_dark = "#5fb894"
    on_primary_dark = "#0b1f18"
    secondary_dark = "#e0a862"
    surface_dark = "#1b1c1a"

    @classmethod
    def light_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_light,
                on_primary=cls.on_primary_light,
                secondary=cls.secondary_light,
                surface=cls.surface_light,
                error=cls.error_light,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

    @classmethod
    def dark_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_dark,
                on_primary=cls.on_primary_dark,
                secondary=cls.secondary_dark,
                surface=cls.surface_dark,
                error=cls.error_light,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )
