"""Column types shared by the hosted table mappings."""

from sqlalchemy import JSON, Text
from sqlalchemy.dialects import postgresql

# ``text[]`` on the hosted database, JSON everywhere else (local SQLite runs).
StringList = JSON().with_variant(postgresql.ARRAY(Text), "postgresql")

__all__ = ["StringList"]
