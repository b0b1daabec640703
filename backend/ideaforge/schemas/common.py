"""Response envelope and shared field types."""

from __future__ import annotations

import time
from typing import Annotated, Any
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
DECIMAL_AMOUNT_PATTERN = r"^\d+(\.\d+)?$"


def _check_url(value: str) -> str:
    # returned unchanged, CIDs in the host part are case-sensitive
    parts = urlsplit(value)
    if not parts.scheme or not (parts.netloc or parts.path):
        raise ValueError("must be a URL")
    return value


UrlString = Annotated[str, AfterValidator(_check_url)]


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def now_ms() -> int:
    return int(time.time() * 1000)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    return value


def ok(data: Any) -> dict[str, Any]:
    """Wrap a successful payload; ``error`` is never present."""

    return {"success": True, "data": _dump(data), "timestamp": now_ms()}


def failure(message: str) -> dict[str, Any]:
    """Wrap an error message; ``data`` is never present."""

    return {"success": False, "error": message, "timestamp": now_ms()}
