"""Database package."""

from talentlink.db.base import Base, StoreRegistry, commit, flush, get_db
from talentlink.db.tables import (
    COLLECTIONS,
    JOB_COLLECTIONS,
    PendingJob,
    PublishedJob,
    User,
)

__all__ = [
    "Base",
    "StoreRegistry",
    "commit",
    "flush",
    "get_db",
    "COLLECTIONS",
    "JOB_COLLECTIONS",
    "User",
    "PendingJob",
    "PublishedJob",
]
