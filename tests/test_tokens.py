"""Tests for TokenService issue/verify."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from conftest import JWT_SECRET, identity
from stock_portfolio.auth import TokenService
from stock_portfolio.db import Role
from stock_portfolio.errors import ConfigurationError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _flip(char: str) -> str:
    return "A" if char != "A" else "B"


@pytest.mark.parametrize("role", list(Role))
def test_verify_returns_issued_claims(token_service, role):
    claims = identity(role, email=f"{role.value}@example.com", subject_id="42")
    assert token_service.verify(token_service.issue(claims)) == claims


def test_token_payload_carries_identity_and_seven_day_expiry(token_service):
    token = token_service.issue(identity())
    payload = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
    assert payload["sub"] == "1"
    assert payload["email"] == "ada@example.com"
    assert payload["role"] == "investor"
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_expired_token_is_invalid():
    eight_days_ago = datetime.now(timezone.utc) - timedelta(days=8)
    issuer = TokenService(JWT_SECRET, clock=lambda: eight_days_ago)
    verifier = TokenService(JWT_SECRET)
    assert verifier.verify(issuer.issue(identity())) is None


def test_token_is_invalid_at_its_expiry_instant():
    zero_ttl = TokenService(JWT_SECRET, ttl=timedelta(0))
    assert zero_ttl.verify(zero_ttl.issue(identity())) is None


def test_token_just_inside_ttl_is_valid():
    almost_seven_days_ago = datetime.now(timezone.utc) - timedelta(days=7) + timedelta(minutes=5)
    issuer = TokenService(JWT_SECRET, clock=lambda: almost_seven_days_ago)
    assert TokenService(JWT_SECRET).verify(issuer.issue(identity())) == identity()


def test_any_flipped_character_invalidates_token(token_service):
    token = token_service.issue(identity())
    segments = token.split(".")
    assert len(segments) == 3
    for seg_index, segment in enumerate(segments):
        # The last character of a segment may only carry padding bits.
        for pos in range(len(segment) - 1):
            assert segment[pos] in ALPHABET
            mutated = segment[:pos] + _flip(segment[pos]) + segment[pos + 1:]
            parts = list(segments)
            parts[seg_index] = mutated
            assert token_service.verify(".".join(parts)) is None, (seg_index, pos)


def test_token_signed_with_other_secret_is_invalid(token_service):
    other = TokenService("another-secret-key-that-is-at-least-32-bytes")
    assert token_service.verify(other.issue(identity())) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "...."])
def test_malformed_tokens_are_invalid(token_service, token):
    assert token_service.verify(token) is None


def test_unsigned_token_is_invalid(token_service):
    token = jwt.encode(
        {"sub": "1", "email": "ada@example.com", "role": "investor",
         "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        key=None,
        algorithm="none",
    )
    assert token_service.verify(token) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"sub": "1", "email": "ada@example.com"},
        {"sub": "1", "email": "ada@example.com", "role": "superuser"},
        {"email": "ada@example.com", "role": "investor"},
        {"sub": "1", "role": "investor"},
    ],
)
def test_token_missing_or_bad_claims_is_invalid(token_service, payload):
    payload = payload | {"exp": datetime.now(timezone.utc) + timedelta(days=1)}
    token = jwt.encode(payload, JWT_SECRET, algorithm="HS256")
    assert token_service.verify(token) is None


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        TokenService("")
