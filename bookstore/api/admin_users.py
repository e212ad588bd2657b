from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_page, adapt_user, adapt_user_statistics
from bookstore.domain.entities import BackendRole, Page, User, UserStatistics


class AdminUsersApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_users(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        sort_dir: str = "desc",
        username: str | None = None,
        email: str | None = None,
        role: BackendRole | None = None,
        enabled: bool | None = None,
    ) -> Page[User]:
        params = {
            "page": page,
            "size": size,
            "sortBy": sort_by,
            "sortDir": sort_dir,
            "username": username,
            "email": email,
            "role": role,
            "enabled": enabled,
        }
        return adapt_page(self.client.get("/admin/users", params), adapt_user)

    def get(self, user_id: str) -> User:
        return adapt_user(self.client.get(f"/admin/users/{user_id}"))

    def update(self, user_id: str, payload: dict[str, Any]) -> User:
        return adapt_user(self.client.put(f"/admin/users/{user_id}", payload))

    def delete(self, user_id: str) -> None:
        self.client.delete(f"/admin/users/{user_id}")

    def toggle_status(self, user_id: str) -> User:
        return adapt_user(self.client.patch(f"/admin/users/{user_id}/toggle-status"))

    def change_role(self, user_id: str, role: BackendRole) -> User:
        return adapt_user(self.client.patch(f"/admin/users/{user_id}/role", {"role": role}))

    def statistics(self) -> UserStatistics:
        return adapt_user_statistics(self.client.get("/admin/users/statistics") or {})
