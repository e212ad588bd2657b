from pydantic import BaseModel, Field


class AppRules(BaseModel):
    title: str
    currency: str = "VND"


class ApiRules(BaseModel):
    base_url: str
    timeout_seconds: float = 10.0


class PaginationRules(BaseModel):
    catalog_page_size: int = 12
    admin_page_size: int = 10
    orders_page_size: int = 20


class HomeRules(BaseModel):
    latest_limit: int = 8
    bestsellers_limit: int = 4


class CartRules(BaseModel):
    storage_key: str = "cart_items"


class UploadsRules(BaseModel):
    max_upload_bytes: int
    allowlist_mime_types: list[str]
    allowlist_extensions: list[str]


class CheckoutRules(BaseModel):
    phone_pattern: str
    payment_methods: list[str] = Field(default_factory=lambda: ["COD", "ONLINE"])


class RateLimitWindow(BaseModel):
    window_seconds: int
    max_attempts: int | None = None
    max_requests: int | None = None


class RateLimitRules(BaseModel):
    login: RateLimitWindow
    upload: RateLimitWindow


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    app: AppRules
    api: ApiRules
    pagination: PaginationRules
    home: HomeRules
    cart: CartRules
    uploads: UploadsRules
    checkout: CheckoutRules
    rate_limits: RateLimitRules
    ops: OpsRules
