from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

# --- Enums / Literals ---
RoleType = Literal["USER", "ADMIN"]
BackendRole = Literal["CUSTOMER", "ADMIN"]
OrderStatus = Literal["PENDING", "CONFIRMED", "SHIPPED", "DELIVERED", "CANCELLED"]
PaymentMethod = Literal["COD", "ONLINE"]

ORDER_STATUSES: tuple[OrderStatus, ...] = (
    "PENDING",
    "CONFIRMED",
    "SHIPPED",
    "DELIVERED",
    "CANCELLED",
)

T = TypeVar("T")

# --- Catalogue ---

class Category(BaseModel):
    id: str
    name: str
    description: str = ""
    created_at: str = ""
    updated_at: str = ""

class Author(BaseModel):
    id: str
    name: str
    biography: str = ""
    birth_date: str | None = None
    nationality: str | None = None
    image_url: str | None = None
    books_count: int | None = None
    created_at: str = ""
    updated_at: str = ""

class Book(BaseModel):
    id: str
    title: str
    author: str = ""
    description: str = ""
    price: float = 0
    quantity: int = 0  # stock on hand
    category: Category = Field(default_factory=lambda: Category(id="", name=""))
    images: list[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @property
    def cover(self) -> str | None:
        return self.images[0] if self.images else None

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0

# --- Users & Auth ---

class User(BaseModel):
    id: str
    email: str
    name: str
    username: str | None = None
    address: str | None = None
    phone: str | None = None
    role: RoleType = "USER"
    enabled: bool = True
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

class AuthResponse(BaseModel):
    token: str
    user: User

# --- Orders ---

class OrderItem(BaseModel):
    book: Book
    quantity: int = 1
    price: float = 0

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

class Order(BaseModel):
    id: str
    user: User | None = None
    items: list[OrderItem] = Field(default_factory=list)
    total_amount: float = 0
    customer_name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    status: OrderStatus = "PENDING"
    payment_method: str = ""
    note: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

# --- Cart ---

class CartItem(BaseModel):
    id: str  # book id
    title: str
    price: float
    image: str | None = None
    quantity: int
    stock: int

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

# --- Pagination ---

class Page(BaseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    total_pages: int = 0
    current_page: int = 0  # 0-indexed, as the backend reports it
    total_items: int = 0

# --- Uploads ---

class ImageInfo(BaseModel):
    filename: str
    url: str
    size: int = 0
    last_modified: str = ""

# --- Admin statistics ---

class OrderStatistics(BaseModel):
    total_orders: int = 0
    pending_orders: int = 0
    confirmed_orders: int = 0
    shipped_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: float = 0

    def by_status(self) -> dict[OrderStatus, int]:
        return {
            "PENDING": self.pending_orders,
            "CONFIRMED": self.confirmed_orders,
            "SHIPPED": self.shipped_orders,
            "DELIVERED": self.delivered_orders,
            "CANCELLED": self.cancelled_orders,
        }

class OverviewStats(BaseModel):
    total_books: int = 0
    available_books: int = 0
    total_categories: int = 0
    total_authors: int = 0
    orders: OrderStatistics = Field(default_factory=OrderStatistics)
    total_revenue: float = 0

class DashboardStats(BaseModel):
    total_books: int = 0
    available_books: int = 0
    total_categories: int = 0
    total_authors: int = 0
    order_statistics: OrderStatistics = Field(default_factory=OrderStatistics)
    total_revenue: float = 0

class BookStatistics(BaseModel):
    total_books: int = 0
    available_books: int = 0
    out_of_stock_books: int = 0

class UserStatistics(BaseModel):
    total_users: int = 0
    active_users: int = 0
    admin_users: int = 0
    customer_users: int = 0

class AuthorStatistics(BaseModel):
    total_authors: int = 0
    authors_with_books: int = 0
    authors_without_books: int = 0

class MonthlyStat(BaseModel):
    month: str
    year: int
    total_orders: int = 0
    total_revenue: float = 0

class RevenueStatistics(BaseModel):
    total_revenue: float = 0
    monthly_revenue: dict[str, float] = Field(default_factory=dict)
