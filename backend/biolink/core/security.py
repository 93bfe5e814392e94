import logging
from datetime import datetime, timedelta
from typing import Optional
import jwt
from jwt.exceptions import InvalidTokenError
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from ..config import settings
from ..models import Profile
from ..services.profiles import ensure_profile
from ..store import LinkStore, StoreError, get_store

logger = logging.getLogger(__name__)

# Bearer tokens are optional here, the session cookie is checked as well
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth", auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT session token.

    Tokens are normally issued by the identity provider; this is used by
    tooling and tests that need a session.

    Args:
        data: Claims to encode, ``sub`` is the user id
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: Optional[str]) -> Optional[dict]:
    """Claims of a valid token with a subject, None otherwise"""
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except InvalidTokenError:
        return None

    if not payload.get("sub"):
        return None
    return payload


def get_session_claims(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme)
) -> Optional[dict]:
    """Session claims from the Authorization header or the session cookie"""
    return decode_session_token(token or request.cookies.get(settings.SESSION_COOKIE_NAME))


async def get_optional_profile(
    claims: Optional[dict] = Depends(get_session_claims),
    store: LinkStore = Depends(get_store)
) -> Optional[Profile]:
    """
    Profile of the logged-in user, or None without a valid session.

    Raises:
        HTTPException: 500 when the store fails
    """
    if claims is None:
        return None
    try:
        return ensure_profile(store, str(claims["sub"]), claims.get("email"))
    except StoreError as e:
        logger.error("Error loading profile for user %s: %s", claims["sub"], e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load profile. Please try again."
        )


async def get_current_profile(
    profile: Optional[Profile] = Depends(get_optional_profile)
) -> Profile:
    """
    Get the profile of the authenticated user.

    Raises:
        HTTPException: If there is no valid session
    """
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile
