from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_user
from bookstore.domain.entities import User


def split_name(name: str) -> tuple[str, str]:
    """'Nguyen Van A' -> ('Nguyen', 'Van A'). The backend stores two name parts."""
    first, _, last = name.strip().partition(" ")
    return first, last.strip()


class UsersApi:
    """Endpoints for the signed-in user's own account."""

    def __init__(self, client: ApiClient):
        self.client = client

    def me(self) -> User:
        return adapt_user(self.client.get("/users/me"))

    def update_profile(self, name: str, address: str, phone: str) -> User:
        first, last = split_name(name)
        data = self.client.put(
            "/users/me",
            {"firstName": first, "lastName": last, "address": address, "phone": phone},
        )
        return adapt_user(data)

    def change_password(self, old_password: str, new_password: str) -> None:
        self.client.put(
            "/users/me/password",
            {"oldPassword": old_password, "newPassword": new_password},
        )
