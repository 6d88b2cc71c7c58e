"""Schema for GET /api/health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a database probe; status stays "ok" even when MySQL is unreachable."""

    status: Literal["ok"] = "ok"
    version: str = Field(description="Questlog API version")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
