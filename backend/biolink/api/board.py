from fastapi import APIRouter, Depends

from ..models import Profile
from ..schemas.board import BoardState, DropRequest, DropResponse
from ..schemas.profile import ProfileResponse
from ..core.ordering import OrderingEngine, load_board
from ..core.security import get_current_profile
from ..store import LinkStore, get_store

router = APIRouter(tags=["board"])


@router.get("/me", response_model=ProfileResponse)
async def get_me(profile: Profile = Depends(get_current_profile)):
    """Profile of the logged-in user, created on first visit"""
    return profile


@router.get("/board", response_model=BoardState)
async def get_board(
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Get the dashboard board: all links and the active collections.

    Requires authentication.
    """
    return load_board(store, profile.id)


@router.post("/board/drop", response_model=DropResponse)
async def drop(
    drop_data: DropRequest,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Apply a drag-and-drop.

    over_id is the id of the element under the pointer: a collection, another
    link, or "ungrouped". The returned board is the optimistic state, or the
    re-fetched one when a write failed (sync.reconciled).

    Requires authentication.
    """
    engine = OrderingEngine(store, profile.id)
    action, report = engine.drop(drop_data.active_id, drop_data.over_id)

    return DropResponse(action=action, board=engine.board, sync=report)
