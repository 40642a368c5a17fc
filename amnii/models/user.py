"""ORM model for application users (auth and admin gating)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func

from amnii.models.base import Base


class User(Base):
    """
    User account for JWT authentication.

    email is unique (enforced by a unique index, not only by a prior lookup).
    is_admin is set only when the account is created.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r}, is_admin={self.is_admin!r})"
