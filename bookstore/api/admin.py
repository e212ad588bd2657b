from bookstore.api.client import ApiClient
from bookstore.api.mappers import (
    adapt_book,
    adapt_book_statistics,
    adapt_dashboard,
    adapt_list,
    adapt_order,
    adapt_overview,
)
from bookstore.domain.entities import (
    Book,
    BookStatistics,
    DashboardStats,
    Order,
    OverviewStats,
)


class AdminApi:
    """Dashboard statistics under /admin."""

    def __init__(self, client: ApiClient):
        self.client = client

    def overview(self) -> OverviewStats:
        return adapt_overview(self.client.get("/admin/overview") or {})

    def dashboard(self) -> DashboardStats:
        return adapt_dashboard(self.client.get("/admin/dashboard") or {})

    def book_statistics(self) -> BookStatistics:
        return adapt_book_statistics(self.client.get("/admin/books/statistics") or {})

    def bestsellers(self, limit: int = 10) -> list[Book]:
        return adapt_list(self.client.get("/admin/bestsellers", {"limit": limit}), adapt_book)

    def largest_orders(self) -> list[Order]:
        return adapt_list(self.client.get("/admin/largest-orders"), adapt_order)
