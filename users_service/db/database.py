"""
Database engine and session construction.

Builds the SQLAlchemy engine for a URL with the pool settings each backend
needs (in-memory SQLite shares one connection through ``StaticPool``) and the
session factory the record store draws its sessions from.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def compose_database_url(server: str, database: str) -> str:
    """Join a server address and a database name into one SQLAlchemy URL.

    ``postgresql://user:pass@db:5432`` + ``users`` gives
    ``postgresql://user:pass@db:5432/users``; ``sqlite:///`` + ``users.db``
    gives ``sqlite:///users.db``.
    """
    server = server.strip()
    database = database.strip().lstrip("/")
    if server.endswith("/"):
        return f"{server}{database}"
    return f"{server}/{database}"


def is_sqlite_memory_url(url: str) -> bool:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return False
    return parsed.database in (None, "", ":memory:")


def engine_kwargs(url: str) -> dict:
    """Return the ``create_engine`` keyword arguments for ``url``."""
    if make_url(url).get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if is_sqlite_memory_url(url):
            # In-memory SQLite with StaticPool so the schema persists across connections
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


def build_engine(url: str) -> Engine:
    return create_engine(url, **engine_kwargs(url))


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)
