import math
import uuid
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, model_validator


def _check_finite(value: Any) -> None:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("attribute values must be finite numbers")
    if isinstance(value, dict):
        for item in value.values():
            _check_finite(item)
    elif isinstance(value, list):
        for item in value:
            _check_finite(item)


class UserBase(BaseModel):
    # Attributes are opaque to the service; every key is carried through as-is.
    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def reject_non_finite_numbers(self):
        # NaN and Infinity are not JSON and cannot be served back
        for value in (self.__pydantic_extra__ or {}).values():
            _check_finite(value)
        return self

    def attributes(self) -> Dict[str, Any]:
        """Return the stored document: every field except ``id``."""
        data = self.model_dump(mode="json")
        data.pop("id", None)
        return data


class UserCreate(UserBase):
    pass


class UserUpdate(UserBase):
    pass


class User(UserBase):
    id: uuid.UUID
