"""orjson helpers shared by the bridge, transport and webhook code."""

from typing import Any, Dict, List, Union

import orjson
from pydantic import BaseModel

# Free-form JSON document forwarded without inspection
JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]
JSONObject = Dict[str, JSONValue]


def _default(obj: Any):
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(value: Any) -> bytes:
    """Serialize to compact JSON bytes. Pydantic models are dumped in JSON mode."""
    return orjson.dumps(value, default=_default)


def loads(data: Union[bytes, bytearray, memoryview, str]) -> JSONValue:
    return orjson.loads(data)


def loads_object(data: Union[bytes, str]) -> JSONObject:
    """
    Decode a JSON document that must be an object.

    Raises:
        ValueError: if the document is not valid JSON or not an object
    """
    value = orjson.loads(data)
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value
