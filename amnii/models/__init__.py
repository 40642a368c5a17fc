"""SQLAlchemy ORM models."""

from amnii.models.base import Base
from amnii.models.user import User

__all__ = ["Base", "User"]
