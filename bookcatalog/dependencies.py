"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers and the
GraphQL context getter. FastAPI's Depends() function manages their
lifecycle.

The catalog store is the main one: tests swap it out through
``app.dependency_overrides[get_store]`` without touching resolvers.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from bookcatalog.config import get_settings
from bookcatalog.database import get_db
from bookcatalog.store import CatalogStore, SqlCatalogStore, get_memory_store

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_store(db: Session = Depends(get_db)):
#
# You can write:
#   def get_store(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


def get_store(db: DbSession) -> CatalogStore:
    """
    Provide the catalog store for one request.

    - "memory" backend: the shared in-process store
    - "sql" backend: a SqlCatalogStore on the request's session, which
      get_db closes when the request (or subscription) ends

    Sessions connect lazily, so the memory backend never touches the
    database.
    """
    if settings.store_backend == "memory":
        return get_memory_store()

    return SqlCatalogStore(db)


Store = Annotated[CatalogStore, Depends(get_store)]
