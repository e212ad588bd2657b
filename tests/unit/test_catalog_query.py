from bookstore.domain.catalog_query import BookQuery, page_window, sort_option, sort_value_for


def test_from_query_string_defaults():
    q = BookQuery.from_query_string("")
    assert q.page == 1
    assert q.limit == 12
    assert q.filters == {}
    assert q.api_page == 0


def test_from_query_string_parses_filters_and_ignores_blanks():
    q = BookQuery.from_query_string("?page=3&title=Mat&category=&minPrice=10000")
    assert q.page == 3
    assert q.filters == {"title": "Mat", "minPrice": "10000"}


def test_invalid_page_falls_back():
    assert BookQuery.from_params({"page": "abc"}).page == 1
    assert BookQuery.from_params({"page": "-4"}).page == 1


def test_filter_change_resets_page():
    q = BookQuery.from_params({"page": "4", "title": "a"})

    updated = q.update(category="2")

    assert updated.page == 1
    assert updated.filters == {"title": "a", "category": "2"}


def test_page_change_keeps_filters():
    q = BookQuery.from_params({"title": "a"}).update(page=5)
    assert q.page == 5
    assert q.filters == {"title": "a"}


def test_clearing_a_filter_removes_it():
    q = BookQuery.from_params({"title": "a", "category": "2"}).update(category=None)
    assert q.filters == {"title": "a"}


def test_with_sort():
    q = BookQuery().with_sort("price_desc")
    assert q.filters == {"sortBy": "price", "sortDir": "desc"}
    assert q.with_sort("default").filters == {}


def test_route_round_trip():
    q = BookQuery.from_params({"page": "2", "title": "Mat Biec"})
    assert q.route() == "/books?page=2&title=Mat+Biec"
    assert BookQuery().route() == "/books"


def test_sort_lookup():
    assert sort_option("nope").value == "default"
    assert sort_value_for("title", "asc") == "title_asc"
    assert sort_value_for(None, None) == "default"


def test_page_window():
    assert page_window(0, 1) == []
    assert page_window(0, 3) == [0, 1, 2]
    assert page_window(0, 10) == [0, 1, 2, 3, 4]
    assert page_window(5, 10) == [3, 4, 5, 6, 7]
    assert page_window(9, 10) == [5, 6, 7, 8, 9]
