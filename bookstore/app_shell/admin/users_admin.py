import logging

import flet as ft

from bookstore.api.client import ApiError
from bookstore.api.mappers import to_backend_role
from bookstore.app_shell.router import reload_route, route_with_query
from bookstore.domain.entities import Page, RoleType, User
from bookstore.domain.formatting import format_date
from bookstore.ui.components.card import stat_card
from bookstore.ui.components.pagination import Pagination
from bookstore.ui.components.toast import show_toast
from bookstore.ui.context import ServiceContext
from bookstore.ui.state import AppState

logger = logging.getLogger(__name__)

ADMIN_USERS_ROUTE = "/admin/users"

ROLE_FILTERS = {"": "All roles", "CUSTOMER": "Customers", "ADMIN": "Admins"}


def AdminUsersContent(
    page: ft.Page, ctx: ServiceContext, state: AppState, query: dict[str, str] | None = None
) -> ft.Control:
    query = dict(query or {})
    try:
        current_page = max(0, int(query.get("page", "1")) - 1)
    except ValueError:
        current_page = 0

    def go(**changes: object) -> None:
        params: dict[str, object] = {**query, **changes}
        if "page" not in changes:
            params["page"] = None
        page.go(route_with_query(ADMIN_USERS_ROUTE, params))

    result: Page[User] = Page()
    stats = None
    try:
        result = ctx.admin_users.list_users(
            page=current_page,
            size=ctx.rules.pagination.admin_page_size,
            email=query.get("email"),
            role=query.get("role") or None,  # type: ignore[arg-type]
        )
        stats = ctx.admin_users.statistics()
    except ApiError as e:
        logger.error(f"Failed to list users: {e}")
        show_toast(page, str(e), "error")

    me = state.current_user

    def toggle_status(user: User) -> None:
        try:
            updated = ctx.admin_users.toggle_status(user.id)
        except ApiError as e:
            show_toast(page, str(e), "error")
            return
        show_toast(page, f"{updated.email} is now {'enabled' if updated.enabled else 'disabled'}.", "success")
        reload_route(page)

    def change_role(user: User, role: RoleType) -> None:
        if role == user.role:
            return
        try:
            ctx.admin_users.change_role(user.id, to_backend_role(role))  # type: ignore[arg-type]
        except ApiError as e:
            show_toast(page, str(e), "error")
            return
        show_toast(page, f"{user.email} is now {role.lower()}.", "success")
        reload_route(page)

    def row(u: User) -> ft.DataRow:
        is_me = me is not None and me.id == u.id
        return ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(u.name or u.username or "-")),
                ft.DataCell(ft.Text(u.email)),
                ft.DataCell(
                    ft.Dropdown(
                        value=u.role,
                        width=130,
                        dense=True,
                        options=[ft.dropdown.Option("USER", "Customer"), ft.dropdown.Option("ADMIN", "Admin")],
                        # Admins cannot demote themselves
                        disabled=is_me,
                        on_change=lambda e, usr=u: change_role(usr, e.control.value),
                    )
                ),
                ft.DataCell(
                    ft.Switch(
                        value=u.enabled,
                        disabled=is_me,
                        on_change=lambda _, usr=u: toggle_status(usr),
                    )
                ),
                ft.DataCell(ft.Text(format_date(u.created_at))),
            ]
        )

    summary: list[ft.Control] = []
    if stats is not None:
        summary = [
            stat_card("Users", str(stats.total_users), ft.Icons.PEOPLE, ft.Colors.BLUE),
            stat_card("Active", str(stats.active_users), ft.Icons.CHECK_CIRCLE, ft.Colors.GREEN),
            stat_card("Admins", str(stats.admin_users), ft.Icons.ADMIN_PANEL_SETTINGS, ft.Colors.PURPLE),
            stat_card("Customers", str(stats.customer_users), ft.Icons.PERSON, ft.Colors.TEAL),
        ]

    return ft.Container(
        content=ft.Column(
            [
                ft.Text("User Management", size=24, weight=ft.FontWeight.BOLD),
                ft.Row(summary, wrap=True),
                ft.Row(
                    [
                        ft.TextField(
                            label="Email",
                            value=query.get("email", ""),
                            prefix_icon=ft.Icons.SEARCH,
                            width=260,
                            on_submit=lambda e: go(email=e.control.value),
                        ),
                        ft.Dropdown(
                            label="Role",
                            width=160,
                            value=query.get("role", ""),
                            options=[ft.dropdown.Option(k, v) for k, v in ROLE_FILTERS.items()],
                            on_change=lambda e: go(role=e.control.value),
                        ),
                    ],
                    wrap=True,
                ),
                ft.Divider(),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("Name")),
                        ft.DataColumn(ft.Text("Email")),
                        ft.DataColumn(ft.Text("Role")),
                        ft.DataColumn(ft.Text("Enabled")),
                        ft.DataColumn(ft.Text("Joined")),
                    ],
                    rows=[row(u) for u in result.data],
                ),
                Pagination(result.current_page, result.total_pages, on_page_change=lambda n: go(page=n + 1)),
            ],
            scroll=ft.ScrollMode.AUTO,
        ),
        padding=20,
        expand=True,
    )
