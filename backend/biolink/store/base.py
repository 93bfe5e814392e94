"""
Store capability.

Every component that reads or writes profiles, links, collections or clicks
receives a ``LinkStore`` explicitly. Each write call is independent: there is
no transaction spanning several calls.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple


class StoreError(Exception):
    """A store call failed (constraint violation, connection loss, ...)"""


class NotFoundError(StoreError):
    """The addressed row does not exist"""


class LinkStore(ABC):
    """Persistence operations used by the application layer"""

    # Profiles

    @abstractmethod
    def get_profile(self, profile_id: str) -> Optional[Any]:
        ...

    @abstractmethod
    def get_profile_by_username(self, username: str) -> Optional[Any]:
        ...

    @abstractmethod
    def create_profile(self, **fields) -> Any:
        ...

    # Links

    @abstractmethod
    def list_links(self, user_id: str, active_only: bool = False) -> List[Any]:
        """Owner's links ordered by position."""

    @abstractmethod
    def get_link(self, link_id: str) -> Optional[Any]:
        ...

    @abstractmethod
    def insert_link(self, **fields) -> Any:
        ...

    @abstractmethod
    def update_link(self, link_id: str, **fields) -> Any:
        """Update one link row. Raises NotFoundError when it is gone."""

    @abstractmethod
    def delete_link(self, link_id: str) -> None:
        ...

    @abstractmethod
    def next_link_position(self, user_id: str, collection_id: Optional[str]) -> int:
        """max(position) + 1 within the bucket, 0 when the bucket is empty."""

    # Collections

    @abstractmethod
    def list_collections(self, user_id: str, active_only: bool = False) -> List[Any]:
        ...

    @abstractmethod
    def get_collection(self, collection_id: str) -> Optional[Any]:
        ...

    @abstractmethod
    def insert_collection(self, **fields) -> Any:
        ...

    @abstractmethod
    def update_collection(self, collection_id: str, **fields) -> Any:
        ...

    @abstractmethod
    def delete_collection(self, collection_id: str) -> None:
        ...

    @abstractmethod
    def next_collection_position(self, user_id: str) -> int:
        ...

    @abstractmethod
    def ungroup_links(self, collection_id: str) -> int:
        """Null collection_id on every member link, returns the number of rows touched."""

    # Clicks

    @abstractmethod
    def increment_link_clicks(
        self,
        link_uuid: str,
        ip_addr: str,
        user_agent_str: str,
        referrer_str: str,
    ) -> None:
        """Atomically bump click_count and append one click record."""

    @abstractmethod
    def list_clicks(self, link_id: str, limit: int = 100, offset: int = 0) -> Tuple[List[Any], int]:
        ...
