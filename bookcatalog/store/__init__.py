"""
Catalog Store Package

Persistence for authors, books and users behind one interface:

- base.py: CatalogStore interface and store exceptions
- sql.py: SQLAlchemy implementation (production)
- memory.py: In-process implementation (tests, demos)
"""

from bookcatalog.store.base import CatalogStore, IntegrityViolation, StoreError
from bookcatalog.store.memory import MemoryCatalogStore, get_memory_store
from bookcatalog.store.sql import SqlCatalogStore

__all__ = [
    "CatalogStore",
    "StoreError",
    "IntegrityViolation",
    "MemoryCatalogStore",
    "SqlCatalogStore",
    "get_memory_store",
]
