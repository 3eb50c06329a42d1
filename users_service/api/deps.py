"""
Shared API dependencies.

The record store is opened once by the app lifespan and kept on
``app.state``; endpoints receive it through :func:`get_store`. Request
bodies are decoded as JSON whatever their ``Content-Type`` says.
"""
from typing import Type, TypeVar

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.requests import Request

from users_service.db import schemas
from users_service.db.store import UserStore

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def get_store(request: Request) -> UserStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Record store is not available",
        )
    return store


async def _decode_body(request: Request, model: Type[PayloadT]) -> PayloadT:
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        # Rendered as 400 "Invalid request payload" by the app's handler
        raise RequestValidationError(exc.errors(include_url=False)) from exc


async def get_user_create_payload(request: Request) -> schemas.UserCreate:
    return await _decode_body(request, schemas.UserCreate)


async def get_user_update_payload(request: Request) -> schemas.UserUpdate:
    return await _decode_body(request, schemas.UserUpdate)
