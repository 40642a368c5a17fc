"""Request dependencies: settings, store, token verification (get_current_user) and require_admin."""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from amnii.core.config import Settings
from amnii.core.database import get_db
from amnii.core.errors import (
    ForbiddenError,
    MalformedCredentialError,
    MissingCredentialError,
    UnauthenticatedError,
)
from amnii.core.security import TokenService
from amnii.repositories.users import SqlUserStore
from amnii.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> SqlUserStore:
    return SqlUserStore(db)


def parse_bearer_token(authorization: str | None) -> str:
    """Extract the token from an Authorization header value."""
    if not authorization:
        raise MissingCredentialError()
    if not authorization.startswith(BEARER_PREFIX):
        raise MalformedCredentialError()
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise MalformedCredentialError()
    return token


def get_current_user(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """
    Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid.

    Claims come from the token alone; the user store is not consulted.
    """
    try:
        claims = tokens.verify(parse_bearer_token(authorization))
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    request.state.identity = claims
    return claims


def authorize_admin(claims: TokenClaims) -> None:
    """Allow only tokens carrying the admin flag. Raises ForbiddenError otherwise."""
    if not claims.is_admin:
        raise ForbiddenError()


def require_admin(
    request: Request,
    _current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> TokenClaims:
    """Dependency: require an authenticated caller whose token carries isAdmin. Raises 403 otherwise."""
    identity: TokenClaims | None = getattr(request.state, "identity", None)
    if identity is None:
        raise RuntimeError("require_admin ran before get_current_user set request identity")
    try:
        authorize_admin(identity)
    except ForbiddenError as e:
        logger.info("Admin access denied for user id=%s", identity.subject_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        ) from e
    return identity
