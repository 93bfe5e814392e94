from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from ..models import Profile
from ..core.ordering import load_board
from ..core.security import get_optional_profile
from ..services.profiles import get_public_profile
from ..services.render import (
    get_404_page,
    render_auth_page,
    render_dashboard,
    render_public_profile,
)
from ..store import LinkStore, get_store

router = APIRouter()


def not_found_response() -> HTMLResponse:
    response = HTMLResponse(content=get_404_page(), status_code=404)
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    return response


@router.get("/auth", response_class=HTMLResponse)
async def auth_page():
    """Sign-in placeholder, the target of unauthenticated dashboard visits"""
    return HTMLResponse(content=render_auth_page())


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    store: LinkStore = Depends(get_store),
    profile: Optional[Profile] = Depends(get_optional_profile)
):
    """Serve the owner's dashboard, redirecting to /auth without a session"""
    if profile is None:
        return RedirectResponse(url="/auth", status_code=302)

    return HTMLResponse(content=render_dashboard(profile, load_board(store, profile.id)))


async def public_profile(
    username: str,
    store: LinkStore = Depends(get_store)
):
    """
    Public profile page.

    Only profiles with is_public set are shown, anything else is a 404.
    """
    profile = get_public_profile(store, username)
    if not profile:
        return not_found_response()

    links = store.list_links(profile.id, active_only=True)
    collections = store.list_collections(profile.id, active_only=True)

    return HTMLResponse(content=render_public_profile(profile, links, collections))
