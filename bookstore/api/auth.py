from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_auth_response
from bookstore.domain.entities import AuthResponse


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, username_or_email: str, password: str) -> AuthResponse:
        data = self.client.post(
            "/auth/login",
            {"usernameOrEmail": username_or_email, "password": password},
        )
        return adapt_auth_response(data)

    def register(self, name: str, email: str, password: str) -> str:
        """Create an account. Returns the backend's confirmation message."""
        data = self.client.post(
            "/auth/register",
            {"name": name, "email": email, "password": password},
        )
        if isinstance(data, dict):
            return str(data.get("message") or "")
        return ""
