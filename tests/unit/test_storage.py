from unittest.mock import Mock

from bookstore.adapters.local_storage import ClientStorageAdapter, JsonFileStorage, create_local_storage


def test_json_file_storage_round_trip(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = JsonFileStorage(path)

    store.set("token", "abc")
    store.set("cart_items", [{"id": "1", "quantity": 2}])

    again = JsonFileStorage(path)
    assert again.get("token") == "abc"
    assert again.get("cart_items") == [{"id": "1", "quantity": 2}]

    again.remove("token")
    again.remove("missing")
    assert again.get("token") is None


def test_unreadable_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStorage(path)

    assert store.get("token") is None
    store.set("token", "x")
    assert store.get("token") == "x"


def test_non_object_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileStorage(path).get("anything") is None


def test_create_local_storage_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BOOKSTORE_STORAGE_PATH", str(tmp_path / "env.json"))
    assert create_local_storage().path == tmp_path / "env.json"
    assert create_local_storage(tmp_path / "explicit.json").path == tmp_path / "explicit.json"


def test_client_storage_adapter_prefixes_and_encodes():
    backing: dict[str, str] = {}
    client_storage = Mock()
    client_storage.get.side_effect = backing.get
    client_storage.set.side_effect = backing.__setitem__
    client_storage.contains_key.side_effect = lambda k: k in backing
    client_storage.remove.side_effect = backing.pop

    store = ClientStorageAdapter(client_storage)
    store.set("user", {"id": "1"})

    assert backing == {"bookstore.user": '{"id": "1"}'}
    assert store.get("user") == {"id": "1"}

    store.remove("user")
    store.remove("user")
    assert store.get("user") is None
    client_storage.remove.assert_called_once_with("bookstore.user")


def test_client_storage_adapter_ignores_garbage():
    client_storage = Mock()
    client_storage.get.return_value = "{oops"
    assert ClientStorageAdapter(client_storage).get("cart_items") is None
