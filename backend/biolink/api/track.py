import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..schemas.link import TrackClickRequest
from ..core.clicks import ClickRecorder
from ..store import LinkStore, get_store
from ..utils.validators import get_request_meta
from ..config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["clicks"])
limiter = Limiter(key_func=get_remote_address)


@router.post("/track-click")
@limiter.limit(f"{settings.RATE_LIMIT_TRACK_PER_MINUTE}/minute")
async def track_click(
    request: Request,
    store: LinkStore = Depends(get_store)
):
    """
    Record a click on a public link.

    Rate limited per client IP. The body is parsed here so that every
    failure answers with an ``{"error": ...}`` object.
    """
    try:
        click_data = TrackClickRequest.model_validate(await request.json())
    except ValueError as e:
        logger.error("Error tracking click: invalid body: %s", e)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    if not click_data.link_id:
        return JSONResponse(status_code=400, content={"error": "Link ID is required"})

    ip, user_agent, referrer = get_request_meta(request)
    result = ClickRecorder(store).record(click_data.link_id, ip, user_agent, referrer)

    if result.not_found:
        return JSONResponse(status_code=404, content={"error": "Link not found"})

    if not result.recorded:
        return JSONResponse(status_code=500, content={"error": "Failed to track click"})

    return {"success": True}
