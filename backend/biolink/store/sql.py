import logging
from contextlib import contextmanager
from typing import List, Optional, Tuple

from sqlalchemy import func, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Profile, Link, Collection, LinkClick
from .base import LinkStore, StoreError, NotFoundError

logger = logging.getLogger(__name__)


class SqlStore(LinkStore):
    """LinkStore backed by a SQLAlchemy session. Every write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, what: str):
        """Roll back and raise StoreError on any database error inside the block"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store call failed (%s): %s", what, e)
            raise StoreError(f"Failed to {what}") from e

    def _add(self, row, what: str):
        with self._guard(what):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    # Profiles

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        with self._guard("load profile"):
            return self.db.query(Profile).filter(Profile.id == profile_id).first()

    def get_profile_by_username(self, username: str) -> Optional[Profile]:
        with self._guard("load profile"):
            return self.db.query(Profile).filter(Profile.username == username).first()

    def create_profile(self, **fields) -> Profile:
        return self._add(Profile(**fields), "create profile")

    # Links

    def list_links(self, user_id: str, active_only: bool = False) -> List[Link]:
        with self._guard("list links"):
            query = self.db.query(Link).filter(Link.user_id == user_id)
            if active_only:
                query = query.filter(Link.is_active == True)
            return query.order_by(Link.position, Link.created_at).all()

    def get_link(self, link_id: str) -> Optional[Link]:
        with self._guard("load link"):
            return self.db.query(Link).filter(Link.id == link_id).first()

    def insert_link(self, **fields) -> Link:
        return self._add(Link(**fields), "create link")

    def update_link(self, link_id: str, **fields) -> Link:
        with self._guard("update link"):
            link = self.db.query(Link).filter(Link.id == link_id).first()
            if not link:
                raise NotFoundError(f"Link {link_id} not found")
            for key, value in fields.items():
                setattr(link, key, value)
            self.db.commit()
            self.db.refresh(link)
            return link

    def delete_link(self, link_id: str) -> None:
        with self._guard("delete link"):
            link = self.db.query(Link).filter(Link.id == link_id).first()
            if not link:
                raise NotFoundError(f"Link {link_id} not found")
            self.db.delete(link)
            self.db.commit()

    def next_link_position(self, user_id: str, collection_id: Optional[str]) -> int:
        with self._guard("compute link position"):
            query = self.db.query(func.max(Link.position)).filter(Link.user_id == user_id)
            if collection_id is None:
                query = query.filter(Link.collection_id.is_(None))
            else:
                query = query.filter(Link.collection_id == collection_id)
            current = query.scalar()
        return 0 if current is None else current + 1

    # Collections

    def list_collections(self, user_id: str, active_only: bool = False) -> List[Collection]:
        with self._guard("list collections"):
            query = self.db.query(Collection).filter(Collection.user_id == user_id)
            if active_only:
                query = query.filter(Collection.is_active == True)
            return query.order_by(Collection.position, Collection.created_at).all()

    def get_collection(self, collection_id: str) -> Optional[Collection]:
        with self._guard("load collection"):
            return self.db.query(Collection).filter(Collection.id == collection_id).first()

    def insert_collection(self, **fields) -> Collection:
        return self._add(Collection(**fields), "create collection")

    def update_collection(self, collection_id: str, **fields) -> Collection:
        with self._guard("update collection"):
            collection = self.db.query(Collection).filter(Collection.id == collection_id).first()
            if not collection:
                raise NotFoundError(f"Collection {collection_id} not found")
            for key, value in fields.items():
                setattr(collection, key, value)
            self.db.commit()
            self.db.refresh(collection)
            return collection

    def delete_collection(self, collection_id: str) -> None:
        with self._guard("delete collection"):
            collection = self.db.query(Collection).filter(Collection.id == collection_id).first()
            if not collection:
                raise NotFoundError(f"Collection {collection_id} not found")
            self.db.delete(collection)
            self.db.commit()

    def next_collection_position(self, user_id: str) -> int:
        with self._guard("compute collection position"):
            current = self.db.query(func.max(Collection.position)).filter(
                Collection.user_id == user_id
            ).scalar()
        return 0 if current is None else current + 1

    def ungroup_links(self, collection_id: str) -> int:
        with self._guard("ungroup links"):
            count = self.db.query(Link).filter(
                Link.collection_id == collection_id
            ).update({Link.collection_id: None}, synchronize_session="fetch")
            self.db.commit()
        return count

    # Clicks

    def increment_link_clicks(
        self,
        link_uuid: str,
        ip_addr: str,
        user_agent_str: str,
        referrer_str: str,
    ) -> None:
        with self._guard("record click"):
            updated = self.db.query(Link).filter(Link.id == link_uuid).update(
                {Link.click_count: Link.click_count + 1}, synchronize_session=False
            )
            if not updated:
                self.db.rollback()
                raise NotFoundError(f"Link {link_uuid} not found")

            self.db.add(LinkClick(
                link_id=link_uuid,
                ip_address=ip_addr,
                user_agent=user_agent_str,
                referrer=referrer_str
            ))
            self.db.commit()

    def list_clicks(self, link_id: str, limit: int = 100, offset: int = 0) -> Tuple[List[LinkClick], int]:
        with self._guard("list clicks"):
            clicks = self.db.query(LinkClick).filter(
                LinkClick.link_id == link_id
            ).order_by(desc(LinkClick.clicked_at), desc(LinkClick.id)).offset(offset).limit(limit).all()

            total = self.db.query(func.count(LinkClick.id)).filter(LinkClick.link_id == link_id).scalar()
        return clicks, total
