from bookstore.domain import cart
from tests.fakes.data import make_book


def test_add_new_book_creates_line():
    book = make_book("1", price=50_000, quantity=3)

    change = cart.add_item([], book, 2)

    assert change.ok
    assert len(change.items) == 1
    line = change.items[0]
    assert (line.id, line.quantity, line.stock, line.price) == ("1", 2, 3, 50_000)
    assert line.image == book.cover
    assert "Book 1" in change.message


def test_add_existing_book_merges_quantity():
    book = make_book("1", quantity=5)
    items = cart.add_item([], book, 2).items

    change = cart.add_item(items, book, 3)

    assert change.ok
    assert len(change.items) == 1
    assert change.items[0].quantity == 5


def test_add_beyond_stock_is_rejected_and_leaves_cart_untouched():
    book = make_book("1", quantity=3)
    items = cart.add_item([], book, 2).items

    change = cart.add_item(items, book, 2)

    assert not change.ok
    assert change.items == items
    assert "only 3 copies" in change.message


def test_add_out_of_stock_book_is_rejected():
    change = cart.add_item([], make_book("1", quantity=0), 1)
    assert not change.ok
    assert change.items == []


def test_remove_item():
    items = cart.add_item([], make_book("1"), 1).items
    items = cart.add_item(items, make_book("2"), 1).items

    change = cart.remove_item(items, "1")

    assert [i.id for i in change.items] == ["2"]


def test_update_quantity_to_zero_removes_line():
    items = cart.add_item([], make_book("1"), 2).items
    assert cart.update_quantity(items, "1", 0).items == []
    assert cart.update_quantity(items, "1", -3).items == []


def test_update_quantity_clamps_to_stock():
    items = cart.add_item([], make_book("1", quantity=4), 1).items

    change = cart.update_quantity(items, "1", 10)

    assert not change.ok
    assert change.items[0].quantity == 4
    assert "Only 4 copies left" in change.message


def test_update_quantity_unknown_book_is_noop():
    items = cart.add_item([], make_book("1"), 1).items
    change = cart.update_quantity(items, "nope", 3)
    assert change.items == items
    assert change.message is None


def test_totals():
    items = cart.add_item([], make_book("1", price=10_000), 2).items
    items = cart.add_item(items, make_book("2", price=25_000), 1).items

    t = cart.totals(items)

    assert t.total_items == 3
    assert t.total_amount == 45_000
    assert cart.totals([]).total_items == 0


def test_item_quantity():
    items = cart.add_item([], make_book("1"), 2).items
    assert cart.item_quantity(items, "1") == 2
    assert cart.item_quantity(items, "2") == 0
