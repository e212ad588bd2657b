"""
Form models for every user-editable form in the storefront and admin console.

Each form validates with user-facing messages; `field_errors` flattens a
ValidationError into {field: message} for display next to the inputs.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from bookstore.domain.entities import PaymentMethod

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DEFAULT_PHONE_PATTERN = r"(84|0[3|5|7|8|9])+([0-9]{8})\b"
MIN_PASSWORD_LENGTH = 6


class FormModel(BaseModel):
    model_config = ConfigDict(validate_default=True)


def _required(value: Any, message: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValueError(message)
    return text


def _email(value: Any) -> str:
    text = _required(value, "Email is required")
    if not EMAIL_PATTERN.match(text):
        raise ValueError("Invalid email address")
    return text


def field_errors(exc: ValidationError) -> dict[str, str]:
    """First error message per field, with pydantic's prefixes removed."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__all__"
        msg = err["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.setdefault(field, msg)
    return errors


# --- Auth ---

class LoginForm(FormModel):
    username_or_email: str = ""
    password: str = ""

    @field_validator("username_or_email")
    @classmethod
    def _check_identity(cls, v: str) -> str:
        return _required(v, "Username or email is required")

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        _required(v, "Password is required")
        return v


class RegisterForm(FormModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _required(v, "Full name is required")

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("password")
    @classmethod
    def _check_password(cls, v: str) -> str:
        _required(v, "Password is required")
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    @field_validator("confirm_password")
    @classmethod
    def _check_confirm(cls, v: str, info: ValidationInfo) -> str:
        _required(v, "Please confirm your password")
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("Passwords do not match")
        return v

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "password": self.password}


# --- Account ---

class ProfileForm(FormModel):
    name: str = ""
    address: str = ""
    phone: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _required(v, "Full name is required")


class ChangePasswordForm(FormModel):
    old_password: str = ""
    new_password: str = ""
    confirm_new_password: str = ""

    @field_validator("old_password")
    @classmethod
    def _check_old(cls, v: str) -> str:
        return _required(v, "Current password is required")

    @field_validator("new_password")
    @classmethod
    def _check_new(cls, v: str) -> str:
        _required(v, "New password is required")
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    @field_validator("confirm_new_password")
    @classmethod
    def _check_confirm(cls, v: str, info: ValidationInfo) -> str:
        _required(v, "Please confirm your new password")
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Password confirmation does not match")
        return v


# --- Checkout ---

class CheckoutForm(FormModel):
    """
    Shipping details. The phone pattern can be overridden per deployment:
    CheckoutForm.model_validate(data, context={"phone_pattern": ...}).
    """

    customer_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    payment_method: PaymentMethod = "COD"
    note: str = ""

    @field_validator("customer_name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _required(v, "Full name is required")

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, v: str, info: ValidationInfo) -> str:
        text = _required(v, "Phone number is required")
        pattern = DEFAULT_PHONE_PATTERN
        if info.context and info.context.get("phone_pattern"):
            pattern = info.context["phone_pattern"]
        if not re.search(pattern, text):
            raise ValueError("Invalid phone number")
        return text

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return _required(v, "Address is required")


# --- Admin ---

class BookForm(FormModel):
    title: str = ""
    author_id: str = ""
    description: str = ""
    price: float | str | None = None
    quantity: int | str | None = None
    category_id: str = ""
    images: list[str] = []

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: str) -> str:
        return _required(v, "Title is required")

    @field_validator("author_id")
    @classmethod
    def _check_author(cls, v: str) -> str:
        return _required(v, "Author is required")

    @field_validator("description")
    @classmethod
    def _check_description(cls, v: str) -> str:
        return _required(v, "Description is required")

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, v: Any) -> float:
        text = _required(v, "Price is required")
        try:
            price = float(text)
        except ValueError:
            raise ValueError("Price must be a number") from None
        if price <= 0:
            raise ValueError("Price must be positive")
        return price

    @field_validator("quantity", mode="before")
    @classmethod
    def _check_quantity(cls, v: Any) -> int:
        text = _required(v, "Quantity is required")
        try:
            number = float(text)
        except ValueError:
            raise ValueError("Quantity must be a number") from None
        if not number.is_integer():
            raise ValueError("Quantity must be a whole number")
        if number < 0:
            raise ValueError("Quantity cannot be negative")
        return int(number)

    @field_validator("category_id")
    @classmethod
    def _check_category(cls, v: str) -> str:
        return _required(v, "Category is required")

    @field_validator("images")
    @classmethod
    def _check_images(cls, v: list[str]) -> list[str]:
        urls = [u.strip() for u in v if u and u.strip()]
        if not urls:
            raise ValueError("At least one image is required")
        return urls

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "stockQuantity": self.quantity,
            "categoryId": self.category_id,
            "authorId": self.author_id,
            "images": self.images,
        }


class AuthorForm(FormModel):
    name: str = ""
    biography: str = ""
    birth_date: str = ""
    nationality: str = ""
    image_url: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _required(v, "Author name is required")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "biography": self.biography or None,
            "birthDate": self.birth_date or None,
            "nationality": self.nationality or None,
            "imageUrl": self.image_url or None,
        }
        return {k: v for k, v in payload.items() if v is not None}


class CategoryForm(FormModel):
    name: str = ""
    description: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _required(v, "Category name is required")

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description}
