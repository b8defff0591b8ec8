"""Tests for UserStore and PortfolioStore against in-memory SQLite."""
from datetime import timezone

import pytest

from stock_portfolio.db import PortfolioStock, Role, User
from stock_portfolio.errors import ConflictError, ValidationError


def test_create_and_lookup_user(user_store):
    user = user_store.create("Ada", "Ada@Example.com", "hash", Role.ANALYST)
    assert user.id is not None
    assert user_store.get_by_email("ada@example.com").id == user.id
    assert user_store.get_by_email(" ADA@EXAMPLE.COM ").id == user.id
    assert user_store.get_by_id(user.id).name == "Ada"
    assert user_store.get_by_email("nobody@example.com") is None


def test_duplicate_email_conflicts(user_store):
    user_store.create("Ada", "ada@example.com", "hash", Role.INVESTOR)
    with pytest.raises(ConflictError):
        user_store.create("Other", "ADA@example.com", "hash", Role.INVESTOR)


def test_list_symbols_without_portfolio_is_empty(portfolio_store):
    assert portfolio_store.list_symbols("ada@example.com") == []


def test_add_symbol_twice_stores_once(portfolio_store):
    portfolio_store.add_symbol("ada@example.com", "AAPL")
    view = portfolio_store.add_symbol("ada@example.com", "AAPL")
    assert view.stocks == ["AAPL"]
    assert portfolio_store.list_symbols("ada@example.com") == ["AAPL"]


def test_symbols_are_normalized_and_kept_in_insertion_order(portfolio_store):
    portfolio_store.add_symbol("ada@example.com", " msft ")
    portfolio_store.add_symbol("ada@example.com", "aapl")
    portfolio_store.add_symbol("ada@example.com", "MSFT")
    assert portfolio_store.list_symbols("ada@example.com") == ["MSFT", "AAPL"]


def test_remove_symbol(portfolio_store):
    portfolio_store.add_symbol("ada@example.com", "AAPL")
    portfolio_store.add_symbol("ada@example.com", "MSFT")
    view = portfolio_store.remove_symbol("ada@example.com", "aapl")
    assert view.stocks == ["MSFT"]


def test_remove_non_member_is_a_noop(portfolio_store):
    portfolio_store.add_symbol("ada@example.com", "AAPL")
    view = portfolio_store.remove_symbol("ada@example.com", "TSLA")
    assert view.stocks == ["AAPL"]


def test_remove_without_portfolio_is_a_noop(portfolio_store):
    view = portfolio_store.remove_symbol("ghost@example.com", "AAPL")
    assert view.owner_email == "ghost@example.com"
    assert view.stocks == []


def test_portfolios_are_isolated_per_owner(portfolio_store):
    portfolio_store.add_symbol("ada@example.com", "AAPL")
    portfolio_store.add_symbol("bob@example.com", "MSFT")
    assert portfolio_store.list_symbols("ADA@example.com") == ["AAPL"]
    assert portfolio_store.list_symbols("bob@example.com") == ["MSFT"]


@pytest.mark.parametrize("symbol", ["", "   ", None])
def test_empty_symbol_is_rejected(portfolio_store, symbol):
    with pytest.raises(ValidationError):
        portfolio_store.add_symbol("ada@example.com", symbol)
    with pytest.raises(ValidationError):
        portfolio_store.remove_symbol("ada@example.com", symbol)


def test_timestamps_default_to_aware_utc():
    user = User(name="Ada", email="ada@example.com", hashed_password="hash")
    held = PortfolioStock(portfolio_id=1, symbol="AAPL")
    assert user.created_at.tzinfo is timezone.utc
    assert held.added_at.tzinfo is timezone.utc


def test_created_rows_keep_their_timestamps(user_store, portfolio_store):
    user = user_store.create("Ada", "ada@example.com", "hash", Role.INVESTOR)
    portfolio_store.add_symbol("ada@example.com", "AAPL")
    assert user.created_at is not None
    assert portfolio_store.list_symbols("ada@example.com") == ["AAPL"]
