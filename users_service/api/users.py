"""
Users API endpoints.

Translates the five ``/users`` operations into record store calls. Identifier
problems and missing records are client errors (400, merged into one
message); every other store failure is a 500 carrying the store's message.
"""
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from users_service.api.deps import get_store, get_user_create_payload, get_user_update_payload
from users_service.db import schemas
from users_service.db.errors import CLIENT_ERRORS, StoreError
from users_service.db.store import UserStore

INVALID_USER_ID = "Invalid user ID"

router = APIRouter(prefix="/users", tags=["users"])


def _raise_for_store_error(exc: StoreError) -> NoReturn:
    if isinstance(exc, CLIENT_ERRORS):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_USER_ID) from exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("", response_model=List[schemas.User])
def list_users_endpoint(store: UserStore = Depends(get_store)):
    try:
        return store.find_all()
    except StoreError as exc:
        _raise_for_store_error(exc)


@router.post("", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    payload: schemas.UserCreate = Depends(get_user_create_payload),
    store: UserStore = Depends(get_store),
):
    # Any client-supplied id is dropped by attributes(); the store assigns one.
    user = schemas.User.model_validate({**payload.attributes(), "id": store.new_id()})
    try:
        store.insert(user)
    except StoreError as exc:
        _raise_for_store_error(exc)
    return user


@router.get("/{user_id}", response_model=schemas.User)
def get_user_endpoint(user_id: str, store: UserStore = Depends(get_store)):
    try:
        return store.find_by_id(user_id)
    except StoreError as exc:
        _raise_for_store_error(exc)


@router.put("/{user_id}", response_model=schemas.User)
def update_user_endpoint(
    user_id: str,
    payload: schemas.UserUpdate = Depends(get_user_update_payload),
    store: UserStore = Depends(get_store),
):
    try:
        return store.update(user_id, payload)
    except StoreError as exc:
        _raise_for_store_error(exc)


@router.delete("/{user_id}")
def delete_user_endpoint(user_id: str, store: UserStore = Depends(get_store)):
    try:
        store.delete(user_id)
    except StoreError as exc:
        _raise_for_store_error(exc)
    return {"result": "success"}
