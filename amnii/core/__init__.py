"""Core app configuration, database and security."""

from amnii.core.config import Settings, get_settings
from amnii.core.database import build_session_factory, get_db
from amnii.core.security import TokenService, hash_password, verify_password

__all__ = [
    "Settings",
    "TokenService",
    "build_session_factory",
    "get_db",
    "get_settings",
    "hash_password",
    "verify_password",
]
