"""
Verification of the platform-issued session JWT.

The hosted auth service signs access tokens with the project's JWT secret
(HS256). We verify them locally instead of calling back into the auth API on
every request; the user id is the token's `sub` claim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.config import Settings, get_settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(Exception):
    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class AuthenticatedUser:
    id: str
    email: Optional[str] = None
    role: Optional[str] = None


def verify_token(token: str, settings: Settings) -> AuthenticatedUser:
    """
    Decodes and verifies a session token.

    Raises:
        AuthError: If the secret is not configured (500) or the token is
            expired, has the wrong audience or is otherwise invalid (401).
    """
    if not settings.supabase_jwt_secret:
        raise AuthError("SUPABASE_JWT_SECRET not configured", 500)

    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.supabase_jwt_audience,
            options={"verify_exp": True, "verify_aud": True, "require": ["sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidAudienceError:
        raise AuthError("Invalid token audience")
    except jwt.InvalidTokenError as e:
        raise AuthError(f"Invalid token: {e}")

    return AuthenticatedUser(
        id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role"),
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return verify_token(credentials.credentials, settings)
    except AuthError as e:
        if e.status_code == 401:
            logger.info("Rejected token: %s", e.message)
            raise HTTPException(status_code=401, detail="Unauthorized")
        logger.error("Auth misconfigured: %s", e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
