"""Authentication: password hashing, access tokens, credential checks, access gate."""
from stock_portfolio.auth.credentials import CredentialVerifier, identity_for, user_out
from stock_portfolio.auth.gate import (TOKEN_COOKIE, AccessGate,
                                       AccessGateMiddleware, GateDecision,
                                       GateOutcome, GatePolicy)
from stock_portfolio.auth.passwords import PasswordHasher
from stock_portfolio.auth.tokens import TokenService

__all__ = [
    "TOKEN_COOKIE",
    "AccessGate",
    "AccessGateMiddleware",
    "CredentialVerifier",
    "GateDecision",
    "GateOutcome",
    "GatePolicy",
    "PasswordHasher",
    "TokenService",
    "identity_for",
    "user_out",
]
