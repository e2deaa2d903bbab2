from datetime import datetime, timezone

from fastapi import APIRouter

from balance_server.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))
