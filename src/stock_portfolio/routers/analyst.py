"""Analyst pages."""
from typing import Any

from fastapi import APIRouter

from stock_portfolio.deps import Identity, SettingsDep

router = APIRouter(prefix="/analyst", tags=["analyst"])


@router.get("")
def analyst_home(identity: Identity, settings: SettingsDep) -> dict[str, Any]:
    """Analyst landing page: who is signed in and which symbols are tracked."""
    return {"user": identity, "tracked_symbols": list(settings.tracked_symbols)}
