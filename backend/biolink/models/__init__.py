from .profile import Profile
from .collection import Collection
from .link import Link
from .click import LinkClick

__all__ = ["Profile", "Collection", "Link", "LinkClick"]
