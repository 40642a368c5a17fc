"""Login endpoint: exchanges email and password for a JWT."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from amnii.api.deps import get_app_settings, get_token_service, get_user_store
from amnii.core.config import Settings
from amnii.core.errors import InvalidCredentialsError
from amnii.core.security import TokenService
from amnii.repositories.users import SqlUserStore
from amnii.schemas.auth import LoginRequest
from amnii.services.accounts import authenticate_user

router = APIRouter()


@router.post("", response_class=PlainTextResponse)
def login(
    body: LoginRequest,
    store: Annotated[SqlUserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PlainTextResponse:
    """
    Authenticate with email and password; the response body is the JWT.
    Send it on later requests as: Authorization: Bearer <token>
    """
    try:
        token = authenticate_user(
            store, tokens, body, bcrypt_rounds=settings.BCRYPT_ROUNDS
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    return PlainTextResponse(token)
