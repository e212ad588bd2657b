import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.domain.forms import LoginForm, field_errors
from bookstore.services.auth import LoginThrottledError
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


class LoginView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext, state: AppState) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.state = state

        self.identity = ft.TextField(label="Username or email", width=320, autofocus=True)
        self.password = ft.TextField(
            label="Password",
            width=320,
            password=True,
            can_reveal_password=True,
            on_submit=self.login_click,
        )
        self.error_text = ft.Text(color=ft.Colors.ERROR, visible=False)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True
        self.controls = [
            ft.Text("Sign in", size=28, weight=ft.FontWeight.BOLD),
            self.identity,
            self.password,
            self.error_text,
            ft.FilledButton("Login", width=320, on_click=self.login_click),
            ft.TextButton("No account yet? Register", on_click=lambda _: page.go("/register")),
        ]

    def show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True
        self.page.update()

    def login_click(self, e: ft.ControlEvent) -> None:
        self.identity.error_text = None
        self.password.error_text = None
        self.error_text.visible = False

        try:
            form = LoginForm.model_validate(
                {"username_or_email": self.identity.value or "", "password": self.password.value or ""}
            )
        except ValidationError as exc:
            errors = field_errors(exc)
            self.identity.error_text = errors.get("username_or_email")
            self.password.error_text = errors.get("password")
            self.page.update()
            return

        try:
            user = self.ctx.auth_service.login(form.username_or_email, form.password)
        except LoginThrottledError as err:
            self.show_error(str(err))
            return
        except ApiError as err:
            logger.info(f"Login failed for {form.username_or_email}: {err}")
            self.show_error(str(err))
            return

        self.state.current_user = user
        show_toast(self.page, f"Welcome back, {user.name or user.email}!", "success")
        self.page.go(self.state.take_redirect("/"))
