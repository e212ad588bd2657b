from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlencode

DEFAULT_LIMIT = 12


@dataclass(frozen=True)
class SortOption:
    value: str
    label: str
    field: str
    direction: str


SORT_OPTIONS: tuple[SortOption, ...] = (
    SortOption("default", "Default", "id", "asc"),
    SortOption("price_asc", "Price: low to high", "price", "asc"),
    SortOption("price_desc", "Price: high to low", "price", "desc"),
    SortOption("title_asc", "Title: A-Z", "title", "asc"),
    SortOption("title_desc", "Title: Z-A", "title", "desc"),
    SortOption("latest", "Newest", "createdAt", "desc"),
)


def sort_option(value: str | None) -> SortOption:
    return next((o for o in SORT_OPTIONS if o.value == value), SORT_OPTIONS[0])


def sort_value_for(sort_by: str | None, sort_dir: str | None) -> str:
    """Reverse lookup used to preselect the sort dropdown."""
    for o in SORT_OPTIONS:
        if o.field == sort_by and o.direction == sort_dir:
            return o.value
    return SORT_OPTIONS[0].value


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


@dataclass(frozen=True)
class BookQuery:
    """
    Catalogue listing state as carried in the /books query string.

    `page` is 1-indexed for display; `api_page` is what the backend expects.
    Any change to a filter resets the page to 1.
    """

    page: int = 1
    limit: int = DEFAULT_LIMIT
    filters: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: dict[str, str], default_limit: int = DEFAULT_LIMIT) -> BookQuery:
        def as_int(key: str, default: int) -> int:
            try:
                return max(1, int(params.get(key, default)))
            except (TypeError, ValueError):
                return default

        filters = {
            k: str(v) for k, v in params.items()
            if k not in ("page", "limit") and not _is_empty(v)
        }
        return cls(
            page=as_int("page", 1),
            limit=as_int("limit", default_limit),
            filters=filters,
        )

    @classmethod
    def from_query_string(cls, qs: str, default_limit: int = DEFAULT_LIMIT) -> BookQuery:
        return cls.from_params(dict(parse_qsl(qs.lstrip("?"))), default_limit)

    @property
    def api_page(self) -> int:
        return self.page - 1

    def update(self, **changes: Any) -> BookQuery:
        params: dict[str, Any] = {"page": str(self.page), "limit": str(self.limit), **self.filters}
        params.update({k: (None if _is_empty(v) else str(v)) for k, v in changes.items()})

        if any(k != "page" for k in changes):
            params["page"] = "1"

        clean = {k: v for k, v in params.items() if not _is_empty(v)}
        return BookQuery.from_params(clean, default_limit=self.limit)

    def with_sort(self, value: str) -> BookQuery:
        opt = sort_option(value)
        if opt.value == "default":
            return self.update(sortBy=None, sortDir=None)
        return self.update(sortBy=opt.field, sortDir=opt.direction)

    def api_filters(self) -> dict[str, str]:
        return dict(self.filters)

    def to_query_string(self) -> str:
        params: dict[str, str] = {}
        if self.page != 1:
            params["page"] = str(self.page)
        if self.limit != DEFAULT_LIMIT:
            params["limit"] = str(self.limit)
        params.update(self.filters)
        return urlencode(params)

    def route(self, base: str = "/books") -> str:
        qs = self.to_query_string()
        return f"{base}?{qs}" if qs else base


def page_window(current: int, total: int, max_pages: int = 5) -> list[int]:
    """
    0-indexed page numbers shown by the pagination control.

    The window is centred on `current` and slides inward at either edge so it
    keeps `max_pages` entries whenever there are that many pages.
    """
    if total <= 1:
        return []

    half = max_pages // 2
    start = max(0, current - half)
    end = min(total - 1, current + half)

    if current - start < half:
        end = min(total - 1, end + (half - (current - start)))
    if end - current < half:
        start = max(0, start - (half - (end - current)))

    return list(range(start, end + 1))
