from urllib.parse import urlparse
import re

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')

# Top-level routes a public profile must not shadow
RESERVED_USERNAMES = [
    'admin', 'api', 'static', 'www', 'app', 'docs', 'redoc',
    'openapi', 'health', 'status', 'login', 'logout', 'auth',
    'signup', 'dashboard', 'settings'
]

# Request metadata is stored truncated
MAX_META_LENGTH = 512


def normalize_url(url: str) -> tuple[bool, str]:
    """
    Validate a link target, assuming https:// when no scheme is given.

    Args:
        url: The URL as typed by the user

    Returns:
        Tuple of (is_valid, normalized_url_or_error_message)
    """
    url = (url or "").strip()
    if not url:
        return False, "Please enter a valid URL"

    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"

    if not url.startswith('http://') and not url.startswith('https://'):
        url = 'https://' + url

    try:
        result = urlparse(url)
    except ValueError:
        return False, "Please enter a valid URL"

    if result.scheme not in ['http', 'https'] or not result.netloc:
        return False, "Please enter a valid URL"

    if any(c.isspace() for c in result.netloc):
        return False, "Please enter a valid URL"

    return True, url


def validate_username(username: str) -> tuple[bool, str]:
    """
    Validate a profile username.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not username:
        return False, "Username cannot be empty"

    if len(username) < 3 or len(username) > 30:
        return False, "Username must be between 3 and 30 characters"

    if not USERNAME_PATTERN.match(username):
        return False, "Username can only contain letters, digits, underscores and hyphens"

    if username.lower() in RESERVED_USERNAMES:
        return False, f"'{username}' is a reserved word and cannot be used"

    return True, ""


def clean_title(title: str | None, default: str | None = None) -> str | None:
    """Strip a title, falling back to default when it ends up blank"""
    title = (title or "").strip()
    return title or default


def get_client_ip(request) -> str:
    """
    Get client IP address from request.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address, "unknown" when none is available
    """
    # Check for X-Forwarded-For header (if behind proxy)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()[:45]

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()[:45]

    return request.client.host if request.client else "unknown"


def get_request_meta(request) -> tuple[str, str, str]:
    """Best-effort (ip, user_agent, referrer) of a request"""
    return (
        get_client_ip(request),
        request.headers.get('user-agent', '')[:MAX_META_LENGTH],
        request.headers.get('referer', '')[:MAX_META_LENGTH],
    )
