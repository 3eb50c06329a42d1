import uuid

import pytest
from sqlalchemy import inspect

from users_service.db import models, schemas
from users_service.db.errors import (
    DuplicateKeyError,
    InvalidIdentifierError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from users_service.db.store import UserStore


def _user(store, **attrs):
    return schemas.User.model_validate({**attrs, "id": store.new_id()})


def test_connect_creates_collection(store):
    assert models.COLLECTION in inspect(store.engine).get_table_names()
    assert store.count() == 0


def test_insert_then_find_returns_stored_record(store):
    user = _user(store, name="Ann", email="ann@example.com", tags=["a", "b"], age=31)
    store.insert(user)

    found = store.find_by_id(str(user.id))
    assert found == user
    assert found.attributes() == {"name": "Ann", "email": "ann@example.com", "tags": ["a", "b"], "age": 31}


def test_document_does_not_duplicate_id(store):
    user = _user(store, name="Bo")
    store.insert(user)
    with store._session_factory() as db:
        record = db.query(models.UserRecord).one()
        assert record.document == {"name": "Bo"}
        assert record.id == user.id


@pytest.mark.parametrize("raw", ["", "nope", "1234", "5f2b8c1e9d3a4b7f8e6c0a1d", "../users"])
def test_malformed_identifier_is_rejected_before_lookup(store, raw):
    with pytest.raises(InvalidIdentifierError):
        store.find_by_id(raw)
    with pytest.raises(InvalidIdentifierError):
        store.update(raw, schemas.UserUpdate(name="x"))
    with pytest.raises(InvalidIdentifierError):
        store.delete(raw)


def test_absent_identifier_is_not_found(store):
    missing = str(uuid.uuid4())
    with pytest.raises(RecordNotFoundError):
        store.find_by_id(missing)
    with pytest.raises(RecordNotFoundError):
        store.update(missing, schemas.UserUpdate(name="x"))
    with pytest.raises(RecordNotFoundError):
        store.delete(missing)


def test_duplicate_insert_is_rejected(store):
    user = _user(store, name="Ann")
    store.insert(user)
    with pytest.raises(DuplicateKeyError):
        store.insert(schemas.User.model_validate({"id": user.id, "name": "Other"}))
    assert store.count() == 1
    assert store.find_by_id(user.id).attributes() == {"name": "Ann"}


def test_update_replaces_every_field(store):
    user = _user(store, name="Ann", phone="555-0100")
    store.insert(user)

    updated = store.update(str(user.id), schemas.UserUpdate(name="Annie", email="annie@example.com"))

    assert updated.id == user.id
    assert updated.attributes() == {"name": "Annie", "email": "annie@example.com"}
    assert store.find_by_id(user.id) == updated


def test_update_ignores_id_in_payload(store):
    user = _user(store, name="Ann")
    store.insert(user)
    other_id = str(uuid.uuid4())

    updated = store.update(user.id, schemas.UserUpdate.model_validate({"id": other_id, "name": "Ann"}))

    assert updated.id == user.id
    with pytest.raises(RecordNotFoundError):
        store.find_by_id(other_id)


def test_delete_then_find_is_not_found(store):
    user = _user(store, name="Ann")
    store.insert(user)
    store.delete(str(user.id))
    with pytest.raises(RecordNotFoundError):
        store.find_by_id(user.id)
    assert store.count() == 0


def test_find_all_returns_every_record(store):
    users = [_user(store, name=f"user_{i}") for i in range(3)]
    for u in users:
        store.insert(u)
    found = store.find_all()
    assert len(found) == 3
    assert {u.id for u in found} == {u.id for u in users}


def test_driver_failures_surface_as_store_errors(store):
    models.Base.metadata.drop_all(bind=store.engine)
    with pytest.raises(StoreError) as exc:
        store.find_all()
    assert not isinstance(exc.value, (InvalidIdentifierError, RecordNotFoundError))
    assert "users" in str(exc.value)


def test_connect_failure_is_fatal():
    with pytest.raises(StoreUnavailableError):
        UserStore.connect("sqlite:////nonexistent-dir/nested/users.db")
    with pytest.raises(StoreUnavailableError):
        UserStore.connect("nosuchdialect://host/db")


def test_json_round_trip_of_stored_record(store):
    user = _user(store, name="Ann", address={"city": "Oslo", "zip": "0150"}, active=True, score=None)
    store.insert(user)
    found = store.find_by_id(user.id)
    assert schemas.User.model_validate_json(found.model_dump_json()) == found
