"""Access gate: authentication and role-based routing at the request edge.

Every request whose path falls under a protected prefix is decided here before
any handler runs. The decision is a pure function of (path, token):

1. Public paths, and paths outside the protected matcher, are allowed without
   looking at the token.
2. A missing token, or one that fails verification or carries no role, is sent
   to the login page.
3. A valid identity whose role does not match the prefix's required role is
   sent to that role's own home (``/investor``, ``/analyst``), never to login.
4. Anything else is allowed; the verified identity is published on
   ``request.state.identity`` for handlers, which must not re-check roles.

The gate reads the ``token`` cookie only. The plaintext ``user_id``/``email``/
``role`` cookies are never consulted.
"""
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from stock_portfolio.auth.tokens import TokenService
from stock_portfolio.db import Role
from stock_portfolio.errors import AuthenticationFailure, AuthorizationFailure
from stock_portfolio.schemas import IdentityClaims

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

DEFAULT_ROLE_HOMES: dict[Role, str] = {
    Role.INVESTOR: "/investor",
    Role.ANALYST: "/analyst",
    Role.ADMIN: "/admin",
}

# prefix -> required role; None means any authenticated identity.
DEFAULT_PROTECTED: dict[str, Role | None] = {
    "/investor": Role.INVESTOR,
    "/analyst": Role.ANALYST,
    "/api/portfolio": None,
    "/api/auth/me": None,
}


class GateOutcome(str, Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_ROLE_HOME = "redirect_role_home"


@dataclass(frozen=True)
class GateDecision:
    outcome: GateOutcome
    location: str | None = None
    identity: IdentityClaims | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ALLOW


@dataclass(frozen=True)
class GatePolicy:
    """Path classification and role tables.

    Protected prefixes match whole path segments: ``/investor`` covers
    ``/investor`` and ``/investor/...`` but not ``/investors``.
    """

    public_paths: frozenset[str] = frozenset({"/", "/login", "/signup", "/favicon.ico"})
    public_prefixes: tuple[str, ...] = ("/static/",)
    protected: Mapping[str, Role | None] = field(default_factory=lambda: dict(DEFAULT_PROTECTED))
    role_homes: Mapping[Role, str] = field(default_factory=lambda: dict(DEFAULT_ROLE_HOMES))
    api_prefix: str = "/api/"
    login_path: str = "/login"

    def is_public(self, path: str) -> bool:
        return path in self.public_paths or path.startswith(self.public_prefixes)

    def match_protected(self, path: str) -> str | None:
        """Longest protected prefix covering path, or None."""
        matches = [
            prefix
            for prefix in self.protected
            if path == prefix or path.startswith(prefix.rstrip("/") + "/")
        ]
        return max(matches, key=len) if matches else None

    def is_api(self, path: str) -> bool:
        return path.startswith(self.api_prefix)

    def home_for(self, role: Role) -> str:
        return self.role_homes.get(role, f"/{role.value}")


class AccessGate:
    """Decides ALLOW / REDIRECT(login) / REDIRECT(role home) for a request.

    Holds no mutable state; safe to share across concurrent requests.
    """

    def __init__(self, token_service: TokenService, policy: GatePolicy | None = None) -> None:
        self._tokens = token_service
        self.policy = policy or GatePolicy()

    def evaluate(self, path: str, token: str | None) -> GateDecision:
        try:
            return self._evaluate(path, token)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Access gate failed for %s; sending to login", path)
            return self._to_login()

    def _evaluate(self, path: str, token: str | None) -> GateDecision:
        if self.policy.is_public(path):
            return GateDecision(GateOutcome.ALLOW)
        prefix = self.policy.match_protected(path)
        if prefix is None:
            return GateDecision(GateOutcome.ALLOW)
        if not token:
            return self._to_login()
        # verify() rejects tokens without a known role, so identity.role is set.
        identity = self._tokens.verify(token)
        if identity is None:
            return self._to_login()
        required = self.policy.protected[prefix]
        if required is not None and identity.role is not required:
            logger.info("Role %s steered away from %s", identity.role.value, prefix)
            return GateDecision(
                GateOutcome.REDIRECT_ROLE_HOME,
                location=self.policy.home_for(identity.role),
                identity=identity,
            )
        return GateDecision(GateOutcome.ALLOW, identity=identity)

    def _to_login(self) -> GateDecision:
        return GateDecision(GateOutcome.REDIRECT_LOGIN, location=self.policy.login_path)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Runs the gate on every request.

    Page paths get 307 redirects. API paths cannot follow a login redirect, so
    the same decisions are rendered as 401/403 JSON bodies instead.
    """

    def __init__(self, app, gate_factory: Callable[[], AccessGate]) -> None:  # noqa: ANN001
        super().__init__(app)
        self._gate_factory = gate_factory

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        gate = self._gate_factory()
        path = request.url.path
        decision = gate.evaluate(path, request.cookies.get(TOKEN_COOKIE))
        if decision.allowed:
            request.state.identity = decision.identity
            return await call_next(request)
        if gate.policy.is_api(path):
            error = (
                AuthenticationFailure()
                if decision.outcome is GateOutcome.REDIRECT_LOGIN
                else AuthorizationFailure()
            )
            return JSONResponse(status_code=error.status_code, content={"error": error.message})
        return RedirectResponse(decision.location, status_code=307)
