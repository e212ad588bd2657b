from collections.abc import Mapping
from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_book, adapt_list, adapt_page
from bookstore.domain.entities import Book, Page

# Filters understood by GET /books
BOOK_FILTERS = ("title", "category", "minPrice", "maxPrice", "sortBy", "sortDir")


class BooksApi:
    """Public catalogue endpoints."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_books(
        self, page: int = 0, limit: int = 12, filters: Mapping[str, Any] | None = None
    ) -> Page[Book]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        for key, value in (filters or {}).items():
            if key in BOOK_FILTERS:
                params[key] = value
        return adapt_page(self.client.get("/books", params), adapt_book)

    def get_book(self, book_id: str) -> Book:
        return adapt_book(self.client.get(f"/books/{book_id}"))

    def latest(self, limit: int = 8) -> list[Book]:
        return adapt_list(self.client.get("/books/latest", {"limit": limit}), adapt_book)

    def bestsellers(self, limit: int = 4) -> list[Book]:
        return adapt_list(self.client.get("/books/bestsellers", {"limit": limit}), adapt_book)
