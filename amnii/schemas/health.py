"""Schema for GET /health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus user-store reachability."""

    status: Literal["ok"] = "ok"
    version: str = Field(description="Deployed amnii package version")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the user store answered a trivial query",
    )
