# tagshelf/database/repos/_dialect.py
from __future__ import annotations

from sqlalchemy import Table
from sqlalchemy.sql.dml import Insert

from tagshelf.domain.errors import StorageError


def insert_ignore(table: Table, dialect_name: str) -> Insert:
    """
    INSERT ... ON CONFLICT DO NOTHING for the dialects that support it.
    Rows violating a unique constraint are skipped; any other error still raises.
    """
    if dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    elif dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        raise StorageError(f"insert-or-ignore is not supported on dialect {dialect_name!r}")
    return insert(table).on_conflict_do_nothing()
