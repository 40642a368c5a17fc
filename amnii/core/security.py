"""Password hashing and JWT creation/verification for authentication."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from amnii.core.config import JWT_ALGORITHMS, Settings
from amnii.core.errors import InvalidCredentialError
from amnii.schemas.auth import TokenClaims

DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only consumes the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Claim carrying the privilege flag inside the token payload.
ADMIN_CLAIM = "isAdmin"


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password with a fresh salt. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises on mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenService:
    """
    Issues and verifies signed access tokens.

    Built once at startup from settings and shared read-only by all requests.
    Verification is stateless: no store lookup is performed.
    """

    secret: str = field(repr=False)
    algorithm: str = "HS256"
    expire_minutes: int = 60

    def __post_init__(self) -> None:
        if not self.secret or not self.secret.strip():
            raise ValueError("Token signing secret must be set and non-empty")
        if self.algorithm not in JWT_ALGORITHMS:
            raise ValueError(f"Unsupported token signing algorithm: {self.algorithm!r}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_PRIVATE_KEY.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, user_id: int, is_admin: bool) -> str:
        """Create a JWT with sub (user id), isAdmin, iat and exp."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            ADMIN_CLAIM: bool(is_admin),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT; return its identity claims.
        Raises InvalidCredentialError on bad signature, malformed token, expiry or bad claims.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidCredentialError() from e

        is_admin = payload.get(ADMIN_CLAIM)
        if not isinstance(is_admin, bool):
            raise InvalidCredentialError()
        try:
            subject_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidCredentialError() from e
        return TokenClaims(subject_id=subject_id, is_admin=is_admin)
