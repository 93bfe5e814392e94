from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .link import LinkResponse
from .collection import CollectionResponse


class SyncStatus(str, Enum):
    """Persistence state of a single optimistic row write"""
    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"


class RowWrite(BaseModel):
    """One row update issued to the store"""
    table: str  # "links" or "collections"
    row_id: Optional[str] = None
    # Column filter of a bulk update, row_id is None then
    match: Optional[Dict[str, Any]] = None
    changes: Dict[str, Any] = Field(default_factory=dict)
    status: SyncStatus = SyncStatus.PENDING
    error: Optional[str] = None


class SyncReport(BaseModel):
    """Outcome of the writes issued for one board mutation"""
    writes: List[RowWrite] = Field(default_factory=list)
    reconciled: bool = False

    @property
    def failed(self) -> List[RowWrite]:
        return [w for w in self.writes if w.status == SyncStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed


class BoardState(BaseModel):
    """Links and collections of one owner as seen by the dashboard"""
    links: List[LinkResponse] = Field(default_factory=list)
    collections: List[CollectionResponse] = Field(default_factory=list)


class DropRequest(BaseModel):
    """Drag-and-drop result: the dragged element and the element under the pointer"""
    active_id: str
    over_id: Optional[str] = None


class DropResponse(BaseModel):
    """Schema for drop response"""
    action: str
    board: BoardState
    sync: SyncReport
