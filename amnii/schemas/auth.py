"""Request/response schemas for registration, login and token claims."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

NAME_MIN_LEN = 5
NAME_MAX_LEN = 50
EMAIL_MIN_LEN = 5
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 5
PASSWORD_MAX_LEN = 255


def _check_email_length(v: str) -> str:
    if not (EMAIL_MIN_LEN <= len(v) <= EMAIL_MAX_LEN):
        raise ValueError(
            f"length must be between {EMAIL_MIN_LEN} and {EMAIL_MAX_LEN} characters"
        )
    return v


class RegisterRequest(BaseModel):
    """
    Signup payload.

    Unknown keys are dropped, including a client-supplied isAdmin: privilege
    cannot be requested at registration.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return _check_email_length(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return _check_email_length(v)


class TokenClaims(BaseModel):
    """Identity extracted from a verified token; attached to the request."""

    model_config = ConfigDict(frozen=True)

    subject_id: int
    is_admin: bool = False


class UserPublic(BaseModel):
    """Safe projection of a user returned on registration (no password or hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class UserProfile(UserPublic):
    """User details for the caller's own profile and the admin list."""

    is_admin: bool = Field(serialization_alias="isAdmin")


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserProfile]
