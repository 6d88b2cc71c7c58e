"""Health check for load balancers: process liveness and MySQL reachability."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from questlog import __version__
from questlog.core.config import settings
from questlog.core.database import check_db_connected, get_db
from questlog.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """No auth; a failed SELECT 1 is reported as "disconnected", never as a 500."""
    return HealthResponse(
        version=__version__,
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
