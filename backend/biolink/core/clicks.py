import logging
from dataclasses import dataclass
from typing import Optional

from ..store import LinkStore, StoreError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ClickResult:
    """Outcome of a click recording attempt"""
    recorded: bool
    not_found: bool = False
    error: Optional[str] = None


class ClickRecorder:
    """
    Records a click against a link.

    The counter increment and the click record are written by a single
    atomic store call. Failures are logged and returned, never raised, so
    the caller can always let the visitor through to the link.
    """

    def __init__(self, store: LinkStore):
        self.store = store

    def record(
        self,
        link_id: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None,
    ) -> ClickResult:
        try:
            self.store.increment_link_clicks(
                link_uuid=link_id,
                ip_addr=ip or "unknown",
                user_agent_str=user_agent or "",
                referrer_str=referrer or "",
            )
        except NotFoundError as e:
            logger.warning("Click for unknown link %s: %s", link_id, e)
            return ClickResult(recorded=False, not_found=True, error=str(e))
        except StoreError as e:
            logger.error("Error tracking click for link %s: %s", link_id, e)
            return ClickResult(recorded=False, error=str(e))

        return ClickResult(recorded=True)
