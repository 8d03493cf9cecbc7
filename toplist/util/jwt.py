"""JWT token utilities.

Tokens are issued by the account service, which signs
``{"sub": <account id>, "email": ..., "role": ...}``. This API only verifies
them.
"""

from datetime import datetime

import jwt
from pydantic import AliasChoices, BaseModel, Field

from toplist.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    # Standard subject claim; older tokens carried the id as ``user_id``
    user_id: str = Field(
        min_length=1, validation_alias=AliasChoices("sub", "user_id")
    )
    email: str | None = None
    role: str = "USER"
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload.model_validate(payload)
    except ValueError:
        raise JWTError("Malformed token payload")
