"""Account routes: signup, login, signout and the current identity.

Handlers are plain ``def`` so bcrypt and database work run in the threadpool.
"""
import logging

from fastapi import APIRouter, Response, status

from stock_portfolio.auth import identity_for, user_out
from stock_portfolio.auth.cookies import (clear_session_cookies,
                                          set_session_cookies)
from stock_portfolio.deps import (CredentialsDep, Identity, SettingsDep,
                                  TokenServiceDep)
from stock_portfolio.schemas import (AuthResponse, IdentityClaims,
                                     LoginRequest, SignupRequest)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    response: Response,
    credentials: CredentialsDep,
    tokens: TokenServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Create an account and start a session for it."""
    user = credentials.register(body.name, body.email, body.password, body.role)
    out = user_out(user)
    set_session_cookies(
        response,
        tokens.issue(identity_for(user)),
        out,
        max_age=tokens.ttl,
        secure=settings.secure_cookies,
    )
    return AuthResponse(user=out)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    credentials: CredentialsDep,
    tokens: TokenServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Check email and password, then set the session cookies."""
    user = credentials.authenticate(body.email, body.password)
    out = user_out(user)
    set_session_cookies(
        response,
        tokens.issue(identity_for(user)),
        out,
        max_age=tokens.ttl,
        secure=settings.secure_cookies,
    )
    logger.info("User %s logged in", user.id)
    return AuthResponse(user=out)


@router.post("/signout")
def signout(response: Response) -> dict[str, str]:
    clear_session_cookies(response)
    return {"message": "Signed out successfully"}


@router.get("/me")
def me(identity: Identity) -> dict[str, IdentityClaims]:
    """Identity carried by the verified session token."""
    return {"user": identity}
