from .link import LinkCreate, LinkResponse, LinkUpdate, LinkClicks, TrackClickRequest
from .collection import CollectionCreate, CollectionResponse, CollectionUpdate
from .profile import ProfileResponse
from .board import BoardState, DropRequest, DropResponse, RowWrite, SyncReport, SyncStatus

__all__ = [
    "LinkCreate", "LinkResponse", "LinkUpdate", "LinkClicks", "TrackClickRequest",
    "CollectionCreate", "CollectionResponse", "CollectionUpdate",
    "ProfileResponse",
    "BoardState", "DropRequest", "DropResponse", "RowWrite", "SyncReport", "SyncStatus",
]
