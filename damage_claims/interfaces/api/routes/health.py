"""Liveness endpoint."""

from fastapi import APIRouter

from damage_claims.interfaces.api.schemas import HealthRead
from damage_claims.utils import now_in_app_timezone

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthRead)
def health_check() -> HealthRead:
    return HealthRead(status="OK", timestamp=now_in_app_timezone())


__all__ = ["router"]
