"""Registration and login flows: store lookups, password hashing and token issuance."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from amnii.core.errors import (
    ConflictError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
    first_violation_message,
)
from amnii.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    TokenService,
    hash_password,
    verify_password,
)
from amnii.models import User
from amnii.repositories.users import UserStore
from amnii.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """Newly created user and the token issued for it."""

    user: User
    token: str


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int) -> str:
    # Checked when the email is unknown; same cost factor as real hashes so both failures take as long.
    return hash_password("amnii-no-such-user", rounds=rounds)


def validate_registration(data: Mapping[str, Any]) -> RegisterRequest:
    """Validate a raw signup payload. Raises InvalidInputError naming the first violation."""
    try:
        return RegisterRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(first_violation_message(e.errors())) from e


def create_account(
    store: UserStore,
    *,
    name: str,
    email: str,
    password: str,
    is_admin: bool = False,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Create a user after checking email availability.

    The prior lookup gives the common case a clean error; the store's unique
    index decides races, and its rejection maps to the same ConflictError.
    """
    if store.get_by_email(email) is not None:
        raise ConflictError()
    password_hash = hash_password(password, rounds=bcrypt_rounds)
    try:
        user = store.add(
            name=name,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
        )
    except DuplicateEmailError as e:
        raise ConflictError() from e
    logger.info("Created user id=%s is_admin=%s", user.id, user.is_admin)
    return user


def register_user(
    store: UserStore,
    tokens: TokenService,
    payload: RegisterRequest,
    *,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> Registration:
    """Sign up a regular (non-admin) user and issue a token for it."""
    user = create_account(
        store,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        is_admin=False,
        bcrypt_rounds=bcrypt_rounds,
    )
    token = tokens.issue(user.id, user.is_admin)
    return Registration(user=user, token=token)


def authenticate_user(
    store: UserStore,
    tokens: TokenService,
    payload: LoginRequest,
    *,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> str:
    """
    Verify email and password; return a new access token.

    Raises InvalidCredentialsError with the same message for an unknown email
    and for a wrong password.
    """
    user = store.get_by_email(payload.email)
    if user is None:
        verify_password(payload.password, _dummy_hash(bcrypt_rounds))
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()
    if not verify_password(payload.password, user.password_hash):
        logger.info("Login failed: bad password for user id=%s", user.id)
        raise InvalidCredentialsError()
    logger.info("Login succeeded for user id=%s", user.id)
    return tokens.issue(user.id, user.is_admin)
