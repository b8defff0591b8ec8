"""Tests for the stock-portfolio-cli smoke client."""
import json

import httpx
import pytest
import respx

from stock_portfolio.cli.client import main

BASE_URL = "http://portfolio.test"


@pytest.fixture
def mock_api():
    """RESPX router scoped to the test API base URL."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


def run(*argv: str) -> int:
    return main(["--base-url", BASE_URL, *argv])


def test_health(mock_api, capsys):
    mock_api.get("/").mock(return_value=httpx.Response(200, json={"status": "ok"}))
    assert run("health") == 0
    assert json.loads(capsys.readouterr().out) == {"status": "ok"}


def test_signup_posts_all_fields(mock_api):
    route = mock_api.post("/api/auth/signup").mock(
        return_value=httpx.Response(201, json={"user": {"id": "1"}})
    )
    assert run("signup", "Ada", "ada@example.com", "pw", "investor") == 0
    assert json.loads(route.calls[0].request.content) == {
        "name": "Ada", "email": "ada@example.com", "password": "pw", "role": "investor",
    }


def test_portfolio_add_logs_in_and_reuses_cookie(mock_api):
    mock_api.post("/api/auth/login").mock(
        return_value=httpx.Response(200, json={"user": {}}, headers={"set-cookie": "token=abc; Path=/"})
    )
    add = mock_api.post("/api/portfolio").mock(
        return_value=httpx.Response(200, json={"message": "Stock added to portfolio"})
    )
    assert run("--email", "ada@example.com", "--password", "pw", "portfolio", "add", "aapl") == 0
    request = add.calls[0].request
    assert json.loads(request.content) == {"stockSymbol": "aapl"}
    assert "token=abc" in request.headers["cookie"]


def test_portfolio_remove_sends_delete_with_body(mock_api):
    mock_api.post("/api/auth/login").mock(return_value=httpx.Response(200, json={"user": {}}))
    remove = mock_api.delete("/api/portfolio").mock(return_value=httpx.Response(200, json={}))
    assert run("--email", "a@example.com", "--password", "pw", "portfolio", "remove", "MSFT") == 0
    assert json.loads(remove.calls[0].request.content) == {"stockSymbol": "MSFT"}


def test_session_command_without_credentials_exits(mock_api, monkeypatch):
    monkeypatch.delenv("STOCK_PORTFOLIO_EMAIL", raising=False)
    monkeypatch.delenv("STOCK_PORTFOLIO_PASSWORD", raising=False)
    with pytest.raises(SystemExit):
        run("me")


def test_http_error_returns_1(mock_api, capsys):
    mock_api.get("/api/history").mock(return_value=httpx.Response(404, json={"error": "History for stock 'NOPE' not found"}))
    assert run("history", "NOPE") == 1
    err = capsys.readouterr().err
    assert "HTTP error: 404" in err
    assert "not found" in err


def test_history_head(mock_api, capsys):
    points = [{"date": f"2024-01-{i:02d}", "price": float(i)} for i in range(1, 31)]
    mock_api.get("/api/history").mock(return_value=httpx.Response(200, json={"history": points}))
    assert run("history", "AAPL", "--head", "2") == 0
    out = capsys.readouterr().out
    assert "Found 30 history points for AAPL" in out
    assert "2024-01-03" not in out
