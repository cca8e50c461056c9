"""Health check endpoint with the current store size."""

from fastapi import APIRouter

from app.api.deps import UserServiceDep
from app.core.config import settings
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(service: UserServiceDep) -> HealthResponse:
    """
    Return service health status and how many users the store holds.
    Used by load balancers and monitoring; no token required.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        user_count=len(service.store),
    )
