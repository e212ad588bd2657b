from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_author, adapt_list
from bookstore.domain.entities import Author


class AuthorsApi:
    """Public author endpoints. Writes require an admin token."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[Author]:
        return adapt_list(self.client.get("/authors"), adapt_author)

    def get(self, author_id: str) -> Author:
        return adapt_author(self.client.get(f"/authors/{author_id}"))

    def create(self, payload: dict[str, Any]) -> Author:
        return adapt_author(self.client.post("/authors", payload))

    def update(self, author_id: str, payload: dict[str, Any]) -> Author:
        return adapt_author(self.client.put(f"/authors/{author_id}", payload))

    def delete(self, author_id: str) -> None:
        self.client.delete(f"/authors/{author_id}")

    def nationalities(self) -> list[str]:
        data = self.client.get("/authors/nationalities")
        return [str(n) for n in data or [] if n]

    def search(self, q: str) -> list[Author]:
        return adapt_list(self.client.get("/authors/search", {"q": q}), adapt_author)
