"""Builders for domain objects and canned HTTP responses used across tests."""

import json

import httpx

from bookstore.domain.entities import Book, Category


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


def request_json(request: httpx.Request):
    return json.loads(request.content) if request.content else None


def make_book(book_id: str = "1", *, price: float = 100_000, quantity: int = 5, title: str | None = None) -> Book:
    return Book(
        id=book_id,
        title=title or f"Book {book_id}",
        author="Nguyen Nhat Anh",
        price=price,
        quantity=quantity,
        category=Category(id="c1", name="Novels"),
        images=[f"http://api.test/uploads/{book_id}.jpg"],
    )


def book_json(book_id: int = 1, **overrides) -> dict:
    data = {
        "id": book_id,
        "title": f"Book {book_id}",
        "author": {"id": 3, "name": "Nguyen Nhat Anh"},
        "description": "A story",
        "price": 120000,
        "stockQuantity": 4,
        "category": {"id": 2, "name": "Novels"},
        "imageUrl": f"http://api.test/uploads/{book_id}.jpg",
        "createdAt": "2024-05-01T10:00:00",
    }
    data.update(overrides)
    return data
