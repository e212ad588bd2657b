import httpx
import pytest

from bookstore.api.client import ApiClient
from bookstore.app_shell.cli import handle_check, main
from bookstore.app_shell.config import missing_env, validate_ops_rules
from tests.fakes.data import book_json, json_response


def client_for(handler) -> ApiClient:
    return ApiClient("http://api.test/api", transport=httpx.MockTransport(handler))


def test_missing_env(rules, monkeypatch):
    rules.ops.required_env = ["BOOKSTORE_TEST_A", "BOOKSTORE_TEST_B"]
    monkeypatch.setenv("BOOKSTORE_TEST_A", "1")
    monkeypatch.delenv("BOOKSTORE_TEST_B", raising=False)
    assert missing_env(rules) == ["BOOKSTORE_TEST_B"]


def test_validate_ops_rules_exits_on_missing_env(rules, monkeypatch, capsys):
    rules.ops.required_env = ["BOOKSTORE_TEST_MISSING"]
    monkeypatch.delenv("BOOKSTORE_TEST_MISSING", raising=False)

    with pytest.raises(SystemExit) as exc:
        validate_ops_rules(rules)

    assert exc.value.code == 1
    assert "BOOKSTORE_TEST_MISSING" in capsys.readouterr().err


def test_validate_ops_rules_passes(rules):
    validate_ops_rules(rules)


def test_check_healthy_backend(rules, capsys):
    def handler(request):
        assert request.url.path == "/api/books/latest"
        assert request.url.params["limit"] == "1"
        return json_response([book_json(1)])

    assert handle_check(rules, client_for(handler)) == 0
    assert "Rules OK" in capsys.readouterr().out


def test_check_unreachable_backend(rules, capsys):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    assert handle_check(rules, client_for(handler)) == 1
    assert "not healthy" in capsys.readouterr().out


def test_check_missing_env(rules, monkeypatch):
    rules.ops.required_env = ["BOOKSTORE_TEST_MISSING"]
    monkeypatch.delenv("BOOKSTORE_TEST_MISSING", raising=False)
    assert handle_check(rules, client_for(lambda r: json_response([]))) == 1


def test_main_check_with_bad_rules_path(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["--rules", str(tmp_path / "missing.yaml"), "check"])
    assert exc.value.code == 1


def test_main_requires_a_command():
    with pytest.raises(SystemExit):
        main([])
