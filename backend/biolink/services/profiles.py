import logging
import re
from typing import Optional

from ..models import Profile
from ..store import LinkStore
from ..utils.validators import validate_username

logger = logging.getLogger(__name__)

MAX_USERNAME_ATTEMPTS = 10


def base_username(user_id: str, email: Optional[str] = None) -> str:
    """
    Derive a username candidate from the email's local part.

    Falls back to ``user_<first 8 chars of the id>`` when the email gives
    nothing usable.
    """
    candidate = ""
    if email and "@" in email:
        candidate = re.sub(r'[^a-z0-9_-]', '', email.split("@")[0].lower())[:27]

    is_valid, _ = validate_username(candidate)
    if not is_valid:
        candidate = f"user_{user_id.replace('-', '')[:8]}"
    return candidate


def ensure_profile(store: LinkStore, user_id: str, email: Optional[str] = None) -> Profile:
    """
    Get the profile of an authenticated user, creating it on first visit.

    Tries ``base``, ``base1`` ... ``base9`` until a free username is found.
    """
    profile = store.get_profile(user_id)
    if profile:
        return profile

    base = base_username(user_id, email)
    username = base
    attempt = 0
    while attempt < MAX_USERNAME_ATTEMPTS:
        if not store.get_profile_by_username(username):
            break
        attempt += 1
        username = f"{base}{attempt}"
    else:
        username = f"user_{user_id.replace('-', '')[:12]}"

    profile = store.create_profile(
        id=user_id,
        username=username,
        theme="default",
        is_public=True
    )
    logger.info("Created profile %s for user %s", username, user_id)
    return profile


def get_public_profile(store: LinkStore, username: str) -> Optional[Profile]:
    """Profile for the public page, None when missing or not public"""
    profile = store.get_profile_by_username(username)
    if not profile or not profile.is_public:
        return None
    return profile
