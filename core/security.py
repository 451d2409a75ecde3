"""
Token utilities for candidate authentication.

Tokens are issued by the account service; this module verifies them and,
for local tooling and tests, can mint them with the shared secret.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from core.config import settings


JWTPayload = Dict[str, Any]


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified access token."""

    id: int
    email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: JWTPayload) -> "AuthenticatedUser":
        user_id = payload.get("user_id", payload.get("sub"))
        if user_id is None:
            raise jwt.InvalidTokenError("Token missing user_id")
        try:
            return cls(id=int(user_id), email=payload.get("email"))
        except (TypeError, ValueError) as exc:
            raise jwt.InvalidTokenError("Token user_id is not an integer") from exc


def create_access_token(
    user_id: int,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        user_id: ID of the user the token identifies
        email: Optional email claim
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)
        secret: Signing secret (defaults to JWT_SECRET_KEY)
        algorithm: Signing algorithm (defaults to JWT_ALGORITHM)

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: JWTPayload = {
        "sub": str(user_id),
        "user_id": user_id,
        "type": "access",
        "iat": now,
        "exp": expire,
    }
    if email:
        payload["email"] = email

    return jwt.encode(
        payload,
        secret or settings.jwt_secret_key,
        algorithm=algorithm or settings.jwt_algorithm,
    )


def verify_jwt_token(token: str, secret: str, algorithm: str = "HS256") -> JWTPayload:
    """
    Decode and verify a JWT.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed or the signature is wrong
    """
    payload = jwt.decode(token, secret, algorithms=[algorithm])
    if payload.get("type", "access") != "access":
        raise jwt.InvalidTokenError("Not an access token")
    return payload
