import logging

import flet as ft
from pydantic import ValidationError

from bookstore.api.client import ApiError
from bookstore.domain.forms import ChangePasswordForm, ProfileForm, field_errors
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)


def _clear_errors(fields: dict[str, ft.TextField]) -> None:
    for f in fields.values():
        f.error_text = None


def _apply_errors(fields: dict[str, ft.TextField], exc: ValidationError) -> None:
    _clear_errors(fields)
    for name, message in field_errors(exc).items():
        if name in fields:
            fields[name].error_text = message


def ProfileContent(page: ft.Page, ctx: ServiceContext, state: AppState) -> ft.Control:
    user = state.current_user
    profile_fields = {
        "name": ft.TextField(label="Full name", value=user.name if user else ""),
        "phone": ft.TextField(label="Phone", value=(user.phone or "") if user else ""),
        "address": ft.TextField(label="Address", value=(user.address or "") if user else "", multiline=True),
    }
    password_fields = {
        "old_password": ft.TextField(label="Current password", password=True, can_reveal_password=True),
        "new_password": ft.TextField(label="New password", password=True, can_reveal_password=True),
        "confirm_new_password": ft.TextField(label="Confirm new password", password=True, can_reveal_password=True),
    }

    def save_profile(_: ft.ControlEvent) -> None:
        try:
            form = ProfileForm.model_validate({k: f.value or "" for k, f in profile_fields.items()})
        except ValidationError as exc:
            _apply_errors(profile_fields, exc)
            page.update()
            return
        _clear_errors(profile_fields)

        try:
            updated = ctx.users.update_profile(form.name, form.address, form.phone)
        except ApiError as e:
            logger.error(f"Profile update failed: {e}")
            show_toast(page, str(e), "error")
            return

        ctx.auth_service.update_user(updated)
        state.current_user = updated
        show_toast(page, "Profile updated.", "success")
        page.update()

    def change_password(_: ft.ControlEvent) -> None:
        try:
            form = ChangePasswordForm.model_validate({k: f.value or "" for k, f in password_fields.items()})
        except ValidationError as exc:
            _apply_errors(password_fields, exc)
            page.update()
            return
        _clear_errors(password_fields)

        try:
            ctx.users.change_password(form.old_password, form.new_password)
        except ApiError as e:
            logger.error(f"Password change failed: {e}")
            show_toast(page, str(e), "error")
            return

        for f in password_fields.values():
            f.value = ""
            f.error_text = None
        show_toast(page, "Password changed.", "success")
        page.update()

    return ft.Column(
        [
            ft.Text("My profile", size=28, weight=ft.FontWeight.BOLD),
            ft.Text(user.email if user else "", color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Divider(),
            ft.Row(
                [
                    ft.Column(
                        [
                            ft.Text("Profile details", size=20, weight=ft.FontWeight.BOLD),
                            *profile_fields.values(),
                            ft.FilledButton("Save profile", icon=ft.Icons.SAVE, on_click=save_profile),
                        ],
                        expand=True,
                        spacing=10,
                    ),
                    ft.Column(
                        [
                            ft.Text("Change password", size=20, weight=ft.FontWeight.BOLD),
                            *password_fields.values(),
                            ft.OutlinedButton("Change password", icon=ft.Icons.LOCK_RESET, on_click=change_password),
                        ],
                        expand=True,
                        spacing=10,
                    ),
                ],
                vertical_alignment=ft.CrossAxisAlignment.START,
                spacing=30,
            ),
        ],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
