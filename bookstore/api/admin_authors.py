from collections.abc import Iterable
from typing import Any

from bookstore.api.client import ApiClient
from bookstore.api.mappers import adapt_author, adapt_author_statistics, adapt_page
from bookstore.domain.entities import Author, AuthorStatistics, Page


class AdminAuthorsApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_authors(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        sort_dir: str = "desc",
        name: str | None = None,
        nationality: str | None = None,
    ) -> Page[Author]:
        params = {
            "page": page,
            "size": size,
            "sortBy": sort_by,
            "sortDir": sort_dir,
            "name": name,
            "nationality": nationality,
        }
        return adapt_page(self.client.get("/admin/authors", params), adapt_author)

    def get(self, author_id: str) -> Author:
        return adapt_author(self.client.get(f"/admin/authors/{author_id}"))

    def create(self, payload: dict[str, Any]) -> Author:
        return adapt_author(self.client.post("/admin/authors", payload))

    def update(self, author_id: str, payload: dict[str, Any]) -> Author:
        return adapt_author(self.client.put(f"/admin/authors/{author_id}", payload))

    def delete(self, author_id: str) -> None:
        self.client.delete(f"/admin/authors/{author_id}")

    def bulk_delete(self, ids: Iterable[str]) -> None:
        self.client.post("/admin/authors/bulk-delete", {"ids": list(ids)})

    def statistics(self) -> AuthorStatistics:
        return adapt_author_statistics(self.client.get("/admin/authors/statistics") or {})

    def nationalities(self) -> list[str]:
        return [str(n) for n in self.client.get("/admin/authors/nationalities") or [] if n]
