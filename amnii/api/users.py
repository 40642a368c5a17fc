"""User endpoints: registration, own profile, and the admin-only user list."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from amnii.api.deps import (
    get_app_settings,
    get_current_user,
    get_token_service,
    get_user_store,
    require_admin,
)
from amnii.core.config import Settings
from amnii.core.errors import ConflictError
from amnii.core.security import TokenService
from amnii.repositories.users import SqlUserStore
from amnii.schemas.auth import (
    RegisterRequest,
    TokenClaims,
    UserProfile,
    UserPublic,
    UsersListResponse,
)
from amnii.services.accounts import register_user

router = APIRouter()


@router.post("", response_model=UserPublic)
def register(
    body: RegisterRequest,
    response: Response,
    store: Annotated[SqlUserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserPublic:
    """
    Register a new user. Returns id, name and email; the access token is sent
    in the Authorization response header.
    """
    try:
        registration = register_user(
            store, tokens, body, bcrypt_rounds=settings.BCRYPT_ROUNDS
        )
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    response.headers["Authorization"] = registration.token
    return UserPublic.model_validate(registration.user)


@router.get("/me", response_model=UserProfile)
def read_me(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    store: Annotated[SqlUserStore, Depends(get_user_store)],
) -> UserProfile:
    """Return the authenticated user's details (never the password hash)."""
    user = store.get_by_id(current_user.subject_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="The user with the given ID was not found.",
        )
    return UserProfile.model_validate(user)


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    store: Annotated[SqlUserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserProfile.model_validate(u) for u in store.list_all()]
    )
