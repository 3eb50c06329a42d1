"""SQLite compilation shim for the PostgreSQL JSONB type.

Lets ``Base.metadata.create_all()`` emit DDL for the ``users`` document column
when the store runs on SQLite (local runs and the test suite). Storage works
through the generic JSON processors; JSONB operators are not emulated.

Usage: Imported for side-effects by users_service.db.models.
"""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(element, compiler, **kw):  # pragma: no cover - trivial
    return "JSON"
