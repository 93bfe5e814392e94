import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends

from ..models import Profile
from ..schemas.board import SyncReport
from ..schemas.collection import CollectionCreate, CollectionUpdate, CollectionResponse
from ..core.ordering import OrderingEngine
from ..core.security import get_current_profile
from ..store import LinkStore, StoreError, NotFoundError, get_store
from ..utils.validators import clean_title

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["collections"])


def get_owned_collection(store: LinkStore, collection_id: str, profile: Profile):
    """Collection of the current profile, 404 for missing or foreign ones"""
    collection = store.get_collection(collection_id)
    if not collection or collection.user_id != profile.id:
        raise HTTPException(status_code=404, detail="Collection not found")
    return collection


@router.get("", response_model=List[CollectionResponse])
async def list_collections(
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Get all collections of the current profile ordered by position.

    Requires authentication.
    """
    return store.list_collections(profile.id)


@router.post("", response_model=CollectionResponse, status_code=201)
async def create_collection(
    collection_data: CollectionCreate,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Create a collection after the existing ones.

    Requires authentication.
    """
    title = clean_title(collection_data.title)
    if not title:
        raise HTTPException(status_code=400, detail="Collection title is required")

    try:
        return store.insert_collection(
            user_id=profile.id,
            title=title,
            description=clean_title(collection_data.description),
            position=store.next_collection_position(profile.id),
            is_active=True
        )
    except StoreError as e:
        logger.error("Add collection error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to create collection. Please try again.")


@router.patch("/{collection_id}", response_model=CollectionResponse)
async def update_collection(
    collection_id: str,
    collection_update: CollectionUpdate,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Edit a collection's title, description or visibility.

    Requires authentication.
    """
    get_owned_collection(store, collection_id, profile)

    fields = collection_update.model_dump(exclude_unset=True)
    if "title" in fields:
        fields["title"] = clean_title(fields["title"])
        if not fields["title"]:
            raise HTTPException(status_code=400, detail="Collection title is required")

    if "description" in fields:
        fields["description"] = clean_title(fields["description"])

    if "is_active" in fields and fields["is_active"] is None:
        del fields["is_active"]

    try:
        return store.update_collection(collection_id, **fields)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Collection not found")
    except StoreError as e:
        logger.error("Update collection error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to update collection. Please try again.")


@router.post("/{collection_id}/ungroup", response_model=SyncReport)
async def ungroup_collection(
    collection_id: str,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Move every link of the collection to the ungrouped list.

    The collection itself remains. Requires authentication.
    """
    get_owned_collection(store, collection_id, profile)

    report = OrderingEngine(store, profile.id).ungroup_bucket(collection_id)
    if not report.ok:
        raise HTTPException(status_code=500, detail="Failed to ungroup collection. Please try again.")
    return report


@router.delete("/{collection_id}", response_model=SyncReport)
async def delete_collection(
    collection_id: str,
    store: LinkStore = Depends(get_store),
    profile: Profile = Depends(get_current_profile)
):
    """
    Delete a collection. Its links are moved to the ungrouped list.

    Requires authentication.
    """
    get_owned_collection(store, collection_id, profile)

    report = OrderingEngine(store, profile.id).delete_bucket(collection_id)
    if not report.ok:
        raise HTTPException(status_code=500, detail="Failed to delete collection. Please try again.")
    return report
