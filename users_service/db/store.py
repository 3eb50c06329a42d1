"""
Record store for user documents.

Owns the engine behind the ``users`` collection and exposes identifier-keyed
CRUD. Every operation runs in its own short session; driver failures are
rolled back and re-raised as :class:`StoreError` so callers only ever see the
store's error taxonomy. Nothing is retried.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from sqlalchemy import func, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from users_service.db import models, schemas
from users_service.db.database import build_engine, build_session_factory
from users_service.db.errors import (
    DuplicateKeyError,
    InvalidIdentifierError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from users_service.db.identifiers import IdentifierScheme, UUIDIdentifiers

logger = logging.getLogger(__name__)


def _to_schema(record: models.UserRecord) -> schemas.User:
    return schemas.User.model_validate({**(record.document or {}), "id": record.id})


class UserStore:
    """CRUD over the ``users`` collection through one shared engine."""

    def __init__(self, engine: Engine, *, identifiers: Optional[IdentifierScheme] = None):
        self.engine = engine
        self.identifiers = identifiers or UUIDIdentifiers()
        self._session_factory = build_session_factory(engine)

    @classmethod
    def connect(cls, database_url: str, *, identifiers: Optional[IdentifierScheme] = None) -> "UserStore":
        """Build the engine, ping the server and make sure the collection exists.

        Raises StoreUnavailableError when any of those steps fails; callers
        treat that as fatal since there is no mode without storage.
        """
        engine = None
        try:
            engine = build_engine(database_url)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            models.Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, ImportError) as exc:
            if engine is not None:
                engine.dispose()
            logger.critical("store_connect_failed: %s", exc)
            raise StoreUnavailableError(f"Cannot connect to database: {exc}") from exc
        logger.info(
            "store_connected: url=%s collection=%s",
            engine.url.render_as_string(hide_password=True),
            models.COLLECTION,
        )
        return cls(engine, identifiers=identifiers)

    def close(self) -> None:
        self.engine.dispose()

    # Identifiers

    def new_id(self) -> uuid.UUID:
        return self.identifiers.new_id()

    def parse_id(self, raw: Any) -> uuid.UUID:
        parsed = self.identifiers.parse_id(raw)
        if parsed is None:
            raise InvalidIdentifierError(f"Invalid identifier: {raw!r}")
        return parsed

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except StoreError:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("store_operation_failed: %s", exc)
            raise StoreError(str(exc)) from exc
        finally:
            db.close()

    def _get(self, db: Session, user_id: uuid.UUID) -> models.UserRecord:
        record = db.query(models.UserRecord).filter(models.UserRecord.id == user_id).first()
        if record is None:
            raise RecordNotFoundError(f"User {user_id} not found")
        return record

    # CRUD

    def find_all(self) -> List[schemas.User]:
        with self._session() as db:
            records = db.query(models.UserRecord).order_by(models.UserRecord.created_at).all()
            return [_to_schema(r) for r in records]

    def find_by_id(self, user_id: Any) -> schemas.User:
        key = self.parse_id(user_id)
        with self._session() as db:
            return _to_schema(self._get(db, key))

    def insert(self, user: schemas.User) -> None:
        """Persist a new record; ``user.id`` must already be assigned."""
        record = models.UserRecord(id=self.parse_id(user.id), document=user.attributes())
        with self._session() as db:
            db.add(record)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise DuplicateKeyError(f"Duplicate key: user {user.id} already exists") from exc
        logger.debug("user_inserted: id=%s", user.id)

    def update(self, user_id: Any, user: schemas.UserBase) -> schemas.User:
        """Replace every attribute of the record at ``user_id``; the id is kept."""
        key = self.parse_id(user_id)
        with self._session() as db:
            record = self._get(db, key)
            record.document = user.attributes()
            db.commit()
            db.refresh(record)
            logger.debug("user_updated: id=%s", key)
            return _to_schema(record)

    def delete(self, user_id: Any) -> None:
        key = self.parse_id(user_id)
        with self._session() as db:
            db.delete(self._get(db, key))
            db.commit()
        logger.debug("user_deleted: id=%s", key)

    def count(self) -> int:
        with self._session() as db:
            return db.query(func.count(models.UserRecord.id)).scalar() or 0
