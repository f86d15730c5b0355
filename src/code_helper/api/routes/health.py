from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from code_helper.api.dependencies import get_user_store
from code_helper.api.schemas import HealthResponse, ReadinessResponse
from code_helper.core.ports.users import UserStore

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(time=datetime.now(timezone.utc).isoformat())


@router.get("/api/health/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    store: UserStore = Depends(get_user_store),
) -> ReadinessResponse:
    """Readiness check: can the user store be read?"""
    if await store.ping():
        return ReadinessResponse(status="ok", user_store="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", user_store="down")
