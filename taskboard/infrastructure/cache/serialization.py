"""JSON payload encoding for the remote cache tier.

Values are encoded with pydantic-core, so dataclasses, pydantic models,
enums, dates and datetimes round-trip without custom encoders. Reads
validate into the requested type with a TypeAdapter when one is given.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from taskboard.infrastructure.exceptions import CacheSerializationError


@lru_cache(maxsize=128)
def _adapter(value_type: Any) -> TypeAdapter[Any]:
    """TypeAdapter per target type (building one is not free)."""
    return TypeAdapter(value_type)


def serialize(key: str, value: Any) -> bytes:
    """Encode value as JSON bytes.

    Raises:
        CacheSerializationError: If the value is not JSON-serializable.
    """
    try:
        return to_json(value)
    except PydanticSerializationError as e:
        raise CacheSerializationError(key, str(e)) from e


def deserialize(key: str, payload: bytes | str, value_type: Any = None) -> Any:
    """Decode a JSON payload, validating into value_type when given.

    Raises:
        CacheSerializationError: If the payload is not valid JSON or does not
            validate against value_type.
    """
    try:
        if value_type is None:
            return json.loads(payload)
        return _adapter(value_type).validate_json(payload)
    except (ValueError, ValidationError) as e:
        raise CacheSerializationError(key, str(e)) from e
