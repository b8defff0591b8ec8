"""Session cookies set by the authentication endpoints."""
from datetime import timedelta

from fastapi import Response

from stock_portfolio.auth.gate import TOKEN_COOKIE
from stock_portfolio.schemas import UserOut

# Display-only copies of the token claims. Nothing server-side reads them.
INFO_COOKIES = ("user_id", "email", "role")


def set_session_cookies(
    response: Response,
    token: str,
    user: UserOut,
    *,
    max_age: timedelta,
    secure: bool,
) -> None:
    seconds = int(max_age.total_seconds())
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=secure,
    )
    values = {"user_id": user.id, "email": user.email, "role": user.role.value}
    for name in INFO_COOKIES:
        response.set_cookie(
            name,
            values[name],
            max_age=seconds,
            path="/",
            httponly=False,
            samesite="lax",
            secure=secure,
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE, path="/", httponly=True)
    for name in INFO_COOKIES:
        response.delete_cookie(name, path="/")
