from bookstore.api.client import ApiClient
from bookstore.api.mappers import (
    adapt_list,
    adapt_monthly_stat,
    adapt_order,
    adapt_order_statistics,
    adapt_page,
    adapt_revenue,
)
from bookstore.domain.entities import (
    MonthlyStat,
    Order,
    OrderStatistics,
    OrderStatus,
    Page,
    RevenueStatistics,
)


class AdminOrdersApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_orders(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        sort_dir: str = "desc",
        status: OrderStatus | None = None,
        user_email: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> Page[Order]:
        params = {
            "page": page,
            "size": size,
            "sortBy": sort_by,
            "sortDir": sort_dir,
            "status": status,
            "userEmail": user_email,
            "startDate": start_date,
            "endDate": end_date,
        }
        return adapt_page(self.client.get("/orders/admin/all", params), adapt_order)

    def get(self, order_id: str) -> Order:
        return adapt_order(self.client.get(f"/orders/{order_id}"))

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        data = self.client.patch(f"/orders/admin/{order_id}/status", params={"status": status})
        return adapt_order(data)

    def by_status(self, status: OrderStatus, page: int = 0, size: int = 10) -> Page[Order]:
        data = self.client.get(f"/orders/admin/status/{status}", {"page": page, "size": size})
        return adapt_page(data, adapt_order)

    def statistics(self) -> OrderStatistics:
        return adapt_order_statistics(self.client.get("/orders/admin/statistics") or {})

    def revenue(self) -> RevenueStatistics:
        return adapt_revenue(self.client.get("/orders/admin/revenue") or {})

    def monthly_stats(self) -> list[MonthlyStat]:
        return [adapt_monthly_stat(row) for row in self.client.get("/orders/admin/monthly-stats") or []]

    def largest_orders(self, limit: int = 10) -> list[Order]:
        data = self.client.get("/orders/admin/largest-orders", {"limit": limit})
        return adapt_list(data, adapt_order)

    def delete(self, order_id: str) -> None:
        self.client.delete(f"/orders/admin/{order_id}")
