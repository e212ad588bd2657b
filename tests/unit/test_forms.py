import pytest
from pydantic import ValidationError

from bookstore.domain.forms import (
    AuthorForm,
    BookForm,
    CategoryForm,
    ChangePasswordForm,
    CheckoutForm,
    LoginForm,
    RegisterForm,
    field_errors,
)


def errors_of(model, **data) -> dict[str, str]:
    with pytest.raises(ValidationError) as exc:
        model(**data)
    return field_errors(exc.value)


def test_login_requires_both_fields():
    errors = errors_of(LoginForm)
    assert errors == {
        "username_or_email": "Username or email is required",
        "password": "Password is required",
    }


def test_login_strips_identity():
    assert LoginForm(username_or_email="  alice ", password="pw").username_or_email == "alice"


def test_register_valid_payload():
    form = RegisterForm(name="An", email="an@example.com", password="secret1", confirm_password="secret1")
    assert form.to_payload() == {"name": "An", "email": "an@example.com", "password": "secret1"}


def test_register_rules():
    errors = errors_of(RegisterForm, name="", email="bad", password="123", confirm_password="456")
    assert errors["name"] == "Full name is required"
    assert errors["email"] == "Invalid email address"
    assert errors["password"] == "Password must be at least 6 characters"
    # Confirmation is only compared once the password itself is valid
    assert "confirm_password" not in errors


def test_register_password_mismatch():
    errors = errors_of(RegisterForm, name="An", email="an@example.com", password="secret1", confirm_password="secret2")
    assert errors == {"confirm_password": "Passwords do not match"}


def test_change_password_mismatch():
    errors = errors_of(ChangePasswordForm, old_password="x", new_password="newpass", confirm_new_password="other")
    assert errors == {"confirm_new_password": "Password confirmation does not match"}


CHECKOUT = {
    "customer_name": "Tran B",
    "email": "b@example.com",
    "phone": "0912345678",
    "address": "1 Le Loi, Hanoi",
    "payment_method": "COD",
}


def test_checkout_valid():
    form = CheckoutForm(**CHECKOUT)
    assert form.payment_method == "COD"


@pytest.mark.parametrize("phone", ["12345", "0212345678", "abc"])
def test_checkout_rejects_bad_phone(phone):
    errors = errors_of(CheckoutForm, **{**CHECKOUT, "phone": phone})
    assert errors == {"phone": "Invalid phone number"}


def test_checkout_phone_pattern_from_context():
    form = CheckoutForm.model_validate({**CHECKOUT, "phone": "555-1234"}, context={"phone_pattern": r"^\d{3}-\d{4}$"})
    assert form.phone == "555-1234"


def test_checkout_rejects_unknown_payment_method():
    errors = errors_of(CheckoutForm, **{**CHECKOUT, "payment_method": "BITCOIN"})
    assert "payment_method" in errors


BOOK = {
    "title": "Mat Biec",
    "author_id": "3",
    "description": "Classic",
    "price": "85000",
    "quantity": "10",
    "category_id": "2",
    "images": ["http://x/1.jpg"],
}


def test_book_form_coerces_numbers_and_builds_payload():
    form = BookForm(**BOOK)
    assert form.price == 85000.0
    assert form.quantity == 10
    payload = form.to_payload()
    assert payload["stockQuantity"] == 10
    assert payload["authorId"] == "3"
    assert payload["categoryId"] == "2"
    assert payload["images"] == ["http://x/1.jpg"]


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("price", "", "Price is required"),
        ("price", "abc", "Price must be a number"),
        ("price", "0", "Price must be positive"),
        ("quantity", "-1", "Quantity cannot be negative"),
        ("quantity", "1.5", "Quantity must be a whole number"),
        ("images", [" "], "At least one image is required"),
        ("category_id", "", "Category is required"),
    ],
)
def test_book_form_errors(field, value, message):
    errors = errors_of(BookForm, **{**BOOK, field: value})
    assert errors[field] == message


def test_book_form_allows_zero_stock():
    assert BookForm(**{**BOOK, "quantity": "0"}).quantity == 0


def test_author_payload_drops_blank_optionals():
    form = AuthorForm(name="To Hoai", nationality="Vietnamese")
    assert form.to_payload() == {"name": "To Hoai", "nationality": "Vietnamese"}


def test_category_requires_name():
    assert errors_of(CategoryForm, name=" ") == {"name": "Category name is required"}
