import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.domain.forms import RegisterForm, field_errors
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


class RegisterView(ft.Column):  # type: ignore
    """Account creation. The new user signs in afterwards on /login."""

    def __init__(self, page: ft.Page, ctx: ServiceContext, state: AppState) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.state = state

        self.fields = {
            "name": ft.TextField(label="Full name", width=320),
            "email": ft.TextField(label="Email", width=320, keyboard_type=ft.KeyboardType.EMAIL),
            "password": ft.TextField(label="Password", width=320, password=True, can_reveal_password=True),
            "confirm_password": ft.TextField(
                label="Confirm password", width=320, password=True, can_reveal_password=True
            ),
        }
        self.error_text = ft.Text(color=ft.Colors.ERROR, visible=False)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True
        self.controls = [
            ft.Text("Create an account", size=28, weight=ft.FontWeight.BOLD),
            *self.fields.values(),
            self.error_text,
            ft.FilledButton("Register", width=320, on_click=self.register_click),
            ft.TextButton("Already registered? Sign in", on_click=lambda _: page.go("/login")),
        ]

    def register_click(self, e: ft.ControlEvent) -> None:
        for f in self.fields.values():
            f.error_text = None
        self.error_text.visible = False

        try:
            form = RegisterForm.model_validate({k: f.value or "" for k, f in self.fields.items()})
        except ValidationError as exc:
            for name, message in field_errors(exc).items():
                if name in self.fields:
                    self.fields[name].error_text = message
            self.page.update()
            return

        try:
            self.ctx.auth_service.register(form.name, form.email, form.password)
        except ApiError as err:
            logger.info(f"Registration failed for {form.email}: {err}")
            self.error_text.value = str(err)
            self.error_text.visible = True
            self.page.update()
            return

        show_toast(self.page, "Registration successful! Please sign in.", "success")
        self.page.go("/login")
