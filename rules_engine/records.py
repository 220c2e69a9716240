"""
Conversion of structured objects into evaluation records.
"""

import json
from typing import Any, Dict

from pydantic_core import PydanticSerializationError, to_json

from .errors import RecordConversionError


def from_struct(obj: Any) -> Dict[str, Any]:
    """Convert ``obj`` into the mapping form consumed by the engine.

    The object goes through a JSON round trip using pydantic's serializer, so
    model aliases are honoured and dataclasses are supported. Integers come
    back as floats, the same as a generic JSON decode into float numbers.
    """
    try:
        payload = to_json(obj, by_alias=True)
    except PydanticSerializationError as e:
        raise RecordConversionError(
            f"cannot serialize {type(obj).__name__}: {e}",
            details={"type": type(obj).__name__}
        ) from e

    record = json.loads(payload, parse_int=float)
    if not isinstance(record, dict):
        raise RecordConversionError(
            f"{type(obj).__name__} does not serialize to a JSON object",
            details={"type": type(obj).__name__}
        )
    return record
