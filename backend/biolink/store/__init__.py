from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .base import LinkStore, StoreError, NotFoundError
from .sql import SqlStore


# Dependency to get the store capability
def get_store(db: Session = Depends(get_db)) -> LinkStore:
    return SqlStore(db)


__all__ = ["LinkStore", "StoreError", "NotFoundError", "SqlStore", "get_store"]
