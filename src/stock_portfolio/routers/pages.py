"""Public pages: health check and the sign-in and sign-up entry points."""
from fastapi import APIRouter

router = APIRouter(tags=["pages"])


@router.get("/")
def health() -> dict[str, str]:
    """Return health check status."""
    return {"status": "ok"}


@router.get("/login")
def login_page() -> dict[str, str]:
    return {"page": "login", "submit": "/api/auth/login"}


@router.get("/signup")
def signup_page() -> dict[str, str]:
    return {"page": "signup", "submit": "/api/auth/signup"}
