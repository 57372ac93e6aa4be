"""
Evidence Integrity - Actor Identity
Resolves the authenticated actor from a bearer JWT. The actor is an opaque
string used for attribution (collected_by, verified_by, created_by).
"""
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from core.config import api_settings


bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=api_settings.jwt_expire_minutes)

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        api_settings.jwt_secret,
        algorithm=api_settings.jwt_algorithm
    )


def decode_actor(token: str) -> Optional[str]:
    """Return the ``sub`` claim of a valid token, else None."""
    try:
        payload = jwt.decode(
            token,
            api_settings.jwt_secret,
            algorithms=[api_settings.jwt_algorithm]
        )
    except JWTError:
        return None
    actor = payload.get("sub")
    return str(actor) if actor else None


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Authenticated actor identifier, 401 otherwise."""
    actor = decode_actor(credentials.credentials) if credentials else None
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor
