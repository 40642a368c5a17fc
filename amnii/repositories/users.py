"""User store: lookups by id and email, and inserts guarded by the unique email index."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from amnii.core.errors import DuplicateEmailError
from amnii.models import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Persistence contract the account flows depend on."""

    def get_by_email(self, email: str) -> User | None: ...

    def get_by_id(self, user_id: int) -> User | None: ...

    def add(self, *, name: str, email: str, password_hash: str, is_admin: bool = False) -> User:
        """Persist a new user. Raises DuplicateEmailError if the email is taken."""
        ...

    def list_all(self) -> list[User]: ...


class SqlUserStore:
    """UserStore backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def add(self, *, name: str, email: str, password_hash: str, is_admin: bool = False) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("User insert rejected by unique email constraint")
            raise DuplicateEmailError(email) from e
        self.session.refresh(user)
        return user

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()
