"""Identifier generation and parsing for user records."""
from __future__ import annotations

import re
import uuid
from typing import Any, Optional, Protocol

# Canonical hyphenated form or bare 32 hex digits; no braces, URN prefix or padding.
_UUID_TEXT = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}|[0-9a-fA-F]{32}")


class IdentifierScheme(Protocol):
    def new_id(self) -> uuid.UUID:
        ...

    def parse_id(self, raw: Any) -> Optional[uuid.UUID]:
        ...


class UUIDIdentifiers:
    """UUID4 keys, matching the ``UUID`` primary key column."""

    def new_id(self) -> uuid.UUID:
        return uuid.uuid4()

    def parse_id(self, raw: Any) -> Optional[uuid.UUID]:
        """Return the parsed identifier, or None when ``raw`` is malformed."""
        if isinstance(raw, uuid.UUID):
            return raw
        if not isinstance(raw, str) or not _UUID_TEXT.fullmatch(raw):
            return None
        return uuid.UUID(raw)


default_identifiers = UUIDIdentifiers()


def new_id() -> uuid.UUID:
    return default_identifiers.new_id()


def parse_id(raw: Any) -> Optional[uuid.UUID]:
    return default_identifiers.parse_id(raw)
