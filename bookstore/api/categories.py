from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_category, adapt_list
from bookstore.domain.entities import Category


class CategoriesApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[Category]:
        return adapt_list(self.client.get("/categories"), adapt_category)

    def get(self, category_id: str) -> Category:
        return adapt_category(self.client.get(f"/categories/{category_id}"))

    def create(self, payload: dict[str, Any]) -> Category:
        return adapt_category(self.client.post("/categories", payload))

    def update(self, category_id: str, payload: dict[str, Any]) -> Category:
        return adapt_category(self.client.put(f"/categories/{category_id}", payload))

    def delete(self, category_id: str) -> None:
        self.client.delete(f"/categories/{category_id}")
