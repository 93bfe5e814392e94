import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends, Query

from ..models import Profile
from ..schemas.link import LinkCreate, LinkUpdate, LinkResponse, LinkClicks, ClickResponse
from ..core.security import get_current_profile
from ..store import LinkStore, StoreError, NotFoundError, get_store
from ..utils.validators import normalize_url, clean_title

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/links", tags=["links"])


def get_owned_link(store: LinkStore, link_id: str, profile: Profile):
    """Link of the current profile, 404 for missing or foreign links"""
    link = store.get_link(link_id)
    if not link or link.user_id != profile.id:
        raise HTTPException(status_code=404, detail="Link not found")
    return link


@router.get("", response_model=List[LinkResponse])
async def list_links(
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Get all links of the current profile ordered by position.

    Requires authentication.
    """
    return store.list_links(profile.id)


@router.post("", response_model=LinkResponse, status_code=201)
async def create_link(
    link_data: LinkCreate,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Add a link at the end of its bucket (ungrouped unless collection_id is given).

    Requires authentication.
    """
    is_valid, url_or_error = normalize_url(link_data.url)
    if not is_valid:
        raise HTTPException(status_code=400, detail=url_or_error)

    if link_data.collection_id:
        collection = store.get_collection(link_data.collection_id)
        if not collection or collection.user_id != profile.id:
            raise HTTPException(status_code=404, detail="Collection not found")

    try:
        position = store.next_link_position(profile.id, link_data.collection_id)
        link = store.insert_link(
            user_id=profile.id,
            collection_id=link_data.collection_id,
            title=clean_title(link_data.title, "Untitled"),
            url=url_or_error,
            description=link_data.description,
            icon=link_data.icon,
            position=position,
            is_active=True
        )
    except StoreError as e:
        logger.error("Add link error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to add link. Please try again.")

    return link


@router.patch("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: str,
    link_update: LinkUpdate,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Edit a link's title, URL, description or visibility.

    Requires authentication.
    """
    get_owned_link(store, link_id, profile)

    fields = link_update.model_dump(exclude_unset=True)
    if "url" in fields:
        is_valid, url_or_error = normalize_url(fields["url"])
        if not is_valid:
            raise HTTPException(status_code=400, detail=url_or_error)
        fields["url"] = url_or_error

    if "title" in fields:
        fields["title"] = clean_title(fields["title"], "Untitled")

    if "is_active" in fields and fields["is_active"] is None:
        del fields["is_active"]

    try:
        return store.update_link(link_id, **fields)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Link not found")
    except StoreError as e:
        logger.error("Update link error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update link. Please try again.")


@router.delete("/{link_id}")
async def delete_link(
    link_id: str,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Delete a link and its click history.

    Requires authentication.
    """
    get_owned_link(store, link_id, profile)

    try:
        store.delete_link(link_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Link not found")
    except StoreError as e:
        logger.error("Error deleting link: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete link. Please try again.")

    return {"message": "Link deleted successfully"}


@router.get("/{link_id}/clicks", response_model=LinkClicks)
async def get_link_clicks(
    link_id: str,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Get click history for a link, newest first.

    Requires authentication.
    """
    link = get_owned_link(store, link_id, profile)
    clicks, total = store.list_clicks(link_id, limit=limit, offset=offset)

    return LinkClicks(
        link_id=link_id,
        click_count=link.click_count,
        total=total,
        limit=limit,
        offset=offset,
        clicks=[ClickResponse.model_validate(click) for click in clicks]
    )
