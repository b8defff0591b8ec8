"""Signed, time-limited access tokens carrying identity and role claims."""
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt
import pydantic

from stock_portfolio.errors import ConfigurationError
from stock_portfolio.schemas import IdentityClaims

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify HS256 JWTs.

    A token is valid strictly before its ``exp`` instant; at ``exp`` it is
    already expired. ``verify`` never raises: every failure is ``None``.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT_SECRET is not set; protected routes cannot be served")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, claims: IdentityClaims) -> str:
        now = self._clock()
        payload = {
            "sub": claims.subject_id,
            "email": claims.email,
            "role": claims.role.value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> IdentityClaims | None:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
            return IdentityClaims(
                subject_id=payload["sub"],
                email=payload["email"],
                role=payload["role"],
            )
        except (jwt.InvalidTokenError, pydantic.ValidationError, KeyError, TypeError) as exc:
            logger.debug("Rejected access token: %s", type(exc).__name__)
            return None
