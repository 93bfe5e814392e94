"""
Ordering and grouping of links and collections.

Links are partitioned into buckets by ``collection_id`` (``None`` is the
ungrouped bucket). ``position`` only orders links within one bucket. The
engine keeps the dashboard's board state, applies every mutation to it
immediately and then persists the affected rows one write at a time. Writes
are not wrapped in a transaction: a failing write is logged and recorded in
the sync report, the remaining writes still go out, and the board is then
reconciled by re-fetching it from the store.
"""

import logging
from typing import List, Optional, Sequence, TypeVar

from ..schemas.board import BoardState, RowWrite, SyncReport, SyncStatus
from ..schemas.collection import CollectionResponse
from ..schemas.link import LinkResponse
from ..store import LinkStore, StoreError

logger = logging.getLogger(__name__)

# Drop target id of the ungrouped area
UNGROUPED = "ungrouped"

# Drop actions
NO_OP = "none"
REORDER_LINKS = "reorder_links"
MOVE_LINK = "move_link"
REORDER_COLLECTIONS = "reorder_collections"

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Remove the item at old_index and insert it at new_index."""
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


def bucket_links(links: Sequence[LinkResponse], bucket_id: Optional[str]) -> List[LinkResponse]:
    """Links of one bucket in position order"""
    return sorted(
        (link for link in links if link.collection_id == bucket_id),
        key=lambda link: link.position,
    )


def load_board(store: LinkStore, user_id: str) -> BoardState:
    """Fetch the owner's links and active collections from the store"""
    return BoardState(
        links=[LinkResponse.model_validate(link) for link in store.list_links(user_id)],
        collections=[
            CollectionResponse.model_validate(collection)
            for collection in store.list_collections(user_id, active_only=True)
        ],
    )


class OrderingEngine:
    """Board state of one owner plus the operations that rearrange it."""

    def __init__(self, store: LinkStore, user_id: str, board: Optional[BoardState] = None,
                 reconcile: bool = True):
        self.store = store
        self.user_id = user_id
        self.board = board if board is not None else load_board(store, user_id)
        self.reconcile = reconcile

    # Lookups

    def find_link(self, link_id: Optional[str]) -> Optional[LinkResponse]:
        return next((link for link in self.board.links if link.id == link_id), None)

    def find_collection(self, collection_id: Optional[str]) -> Optional[CollectionResponse]:
        return next((c for c in self.board.collections if c.id == collection_id), None)

    def bucket(self, bucket_id: Optional[str]) -> List[LinkResponse]:
        return bucket_links(self.board.links, bucket_id)

    def ordered_collections(self) -> List[CollectionResponse]:
        return sorted(self.board.collections, key=lambda c: c.position)

    # Persistence

    def _write(self, report: SyncReport, table: str, row_id: str, **fields) -> bool:
        write = RowWrite(table=table, row_id=row_id, changes=fields)
        report.writes.append(write)
        try:
            if table == "links":
                self.store.update_link(row_id, **fields)
            else:
                self.store.update_collection(row_id, **fields)
        except StoreError as e:
            write.status = SyncStatus.FAILED
            write.error = str(e)
            logger.error("Error updating %s %s with %s: %s", table, row_id, fields, e)
            return False
        write.status = SyncStatus.SYNCED
        return True

    def _finish(self, report: SyncReport) -> SyncReport:
        if report.failed:
            logger.warning(
                "%d of %d writes failed for user %s",
                len(report.failed), len(report.writes), self.user_id
            )
            if self.reconcile:
                self.board = load_board(self.store, self.user_id)
                report.reconciled = True
        return report

    # Operations

    def reorder_within_bucket(self, bucket_id: Optional[str], dragged_id: str, target_id: str) -> SyncReport:
        """
        Move dragged_id to target_id's index and renumber the whole bucket.

        Every link of the bucket is written, in index order, even when its
        position did not change.
        """
        report = SyncReport()
        if dragged_id == target_id:
            return report

        links = self.bucket(bucket_id)
        ids = [link.id for link in links]
        if dragged_id not in ids or target_id not in ids:
            return report

        reordered = array_move(links, ids.index(dragged_id), ids.index(target_id))
        for index, link in enumerate(reordered):
            link.position = index

        for index, link in enumerate(reordered):
            self._write(report, "links", link.id, position=index)
        return self._finish(report)

    def move_to_bucket(self, link_id: str, destination_bucket_id: Optional[str]) -> SyncReport:
        """
        Reassign a link to another bucket.

        Only collection_id changes. The link keeps its position, so it can
        collide with or leave a gap in the destination sequence; neither the
        source nor the destination bucket is renumbered.
        """
        report = SyncReport()
        link = self.find_link(link_id)
        if link is None or link.collection_id == destination_bucket_id:
            return report

        link.collection_id = destination_bucket_id
        self._write(report, "links", link_id, collection_id=destination_bucket_id)
        return self._finish(report)

    def reorder_buckets(self, dragged_collection_id: str, target_collection_id: str) -> SyncReport:
        """Array-move on the collection list, then write every collection's position"""
        report = SyncReport()
        if dragged_collection_id == target_collection_id:
            return report

        collections = self.ordered_collections()
        ids = [c.id for c in collections]
        if dragged_collection_id not in ids or target_collection_id not in ids:
            return report

        reordered = array_move(collections, ids.index(dragged_collection_id), ids.index(target_collection_id))
        for index, collection in enumerate(reordered):
            collection.position = index
        self.board.collections = reordered

        for index, collection in enumerate(reordered):
            self._write(report, "collections", collection.id, position=index)
        return self._finish(report)

    def _ungroup(self, report: SyncReport, bucket_id: str) -> None:
        for link in self.board.links:
            if link.collection_id == bucket_id:
                link.collection_id = None

        # One bulk update of every links row whose collection_id is bucket_id
        write = RowWrite(table="links", match={"collection_id": bucket_id}, changes={"collection_id": None})
        report.writes.append(write)
        try:
            count = self.store.ungroup_links(bucket_id)
        except StoreError as e:
            write.status = SyncStatus.FAILED
            write.error = str(e)
            logger.error("Error ungrouping collection %s: %s", bucket_id, e)
        else:
            write.status = SyncStatus.SYNCED
            logger.info("Ungrouped %d links from collection %s", count, bucket_id)

    def ungroup_bucket(self, bucket_id: str) -> SyncReport:
        """Move every member link to the ungrouped bucket, positions untouched"""
        report = SyncReport()
        self._ungroup(report, bucket_id)
        return self._finish(report)

    def delete_bucket(self, bucket_id: str) -> SyncReport:
        """
        Ungroup all member links, then remove the collection row.

        The delete is issued even when the ungroup failed; the links foreign
        key is ON DELETE SET NULL.
        """
        report = SyncReport()
        self._ungroup(report, bucket_id)

        self.board.collections = [c for c in self.board.collections if c.id != bucket_id]
        write = RowWrite(table="collections", row_id=bucket_id, changes={"deleted": True})
        report.writes.append(write)
        try:
            self.store.delete_collection(bucket_id)
        except StoreError as e:
            write.status = SyncStatus.FAILED
            write.error = str(e)
            logger.error("Error deleting collection %s: %s", bucket_id, e)
        else:
            write.status = SyncStatus.SYNCED
        return self._finish(report)

    def drop(self, active_id: str, over_id: Optional[str]) -> tuple[str, SyncReport]:
        """
        Resolve a drag-and-drop by the id of the element under the pointer.

        Returns:
            Tuple of (action, sync report)
        """
        if not over_id or active_id == over_id:
            return NO_OP, SyncReport()

        active_link = self.find_link(active_id)
        if active_link is not None:
            over_collection = self.find_collection(over_id)
            if over_collection is not None:
                return MOVE_LINK, self.move_to_bucket(active_id, over_collection.id)

            if over_id == UNGROUPED:
                return MOVE_LINK, self.move_to_bucket(active_id, None)

            over_link = self.find_link(over_id)
            if over_link is not None:
                if over_link.collection_id == active_link.collection_id:
                    return REORDER_LINKS, self.reorder_within_bucket(
                        active_link.collection_id, active_id, over_id
                    )
                return MOVE_LINK, self.move_to_bucket(active_id, over_link.collection_id)
            return NO_OP, SyncReport()

        if self.find_collection(active_id) is not None and self.find_collection(over_id) is not None:
            return REORDER_COLLECTIONS, self.reorder_buckets(active_id, over_id)

        return NO_OP, SyncReport()
