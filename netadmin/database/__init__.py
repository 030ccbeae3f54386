from netadmin.database.base import Base, DocumentIdMixin, TimestampMixin
from netadmin.database.engine import async_session, engine
from netadmin.database.filters import AnyOf, ArrayContains, Equals, QueryFilter, Range, apply_filters
from netadmin.database.session import get_db

__all__ = [
    "Base",
    "DocumentIdMixin",
    "TimestampMixin",
    "async_session",
    "engine",
    "get_db",
    "Equals",
    "Range",
    "ArrayContains",
    "AnyOf",
    "QueryFilter",
    "apply_filters",
]
