"""Column types: JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)."""

from sqlalchemy import JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB

JSONDocument = JSON().with_variant(JSONB(), "postgresql")
# Native UUID on PostgreSQL, CHAR(32) elsewhere
GUID = Uuid(as_uuid=True)
