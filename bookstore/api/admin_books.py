from collections.abc import Iterable, Mapping
from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_book, adapt_page
from bookstore.domain.entities import Book, Page

ADMIN_BOOK_FILTERS = (
    "title",
    "author",
    "categoryId",
    "minPrice",
    "maxPrice",
    "inStock",
    "sortBy",
    "sortDir",
)


class AdminBooksApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_books(
        self, page: int = 0, size: int = 10, filters: Mapping[str, Any] | None = None
    ) -> Page[Book]:
        params: dict[str, Any] = {"page": page, "size": size}
        for key, value in (filters or {}).items():
            if key in ADMIN_BOOK_FILTERS:
                params[key] = value
        return adapt_page(self.client.get("/admin/books", params), adapt_book)

    def get(self, book_id: str) -> Book:
        return adapt_book(self.client.get(f"/admin/books/{book_id}"))

    def create(self, payload: dict[str, Any]) -> Book:
        return adapt_book(self.client.post("/admin/books", payload))

    def update(self, book_id: str, payload: dict[str, Any]) -> Book:
        return adapt_book(self.client.put(f"/admin/books/{book_id}", payload))

    def delete(self, book_id: str) -> None:
        self.client.delete(f"/admin/books/{book_id}")

    def bulk_delete(self, ids: Iterable[str]) -> None:
        self.client.delete("/admin/books/bulk", {"ids": list(ids)})
