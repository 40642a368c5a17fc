"""Pydantic request/response schemas."""

from amnii.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    UserProfile,
    UserPublic,
    UsersListResponse,
)
from amnii.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "UserProfile",
    "UserPublic",
    "UsersListResponse",
]
