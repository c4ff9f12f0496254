"""JSON implementation of the Serializer interface.

JSON has no binary type, so ``bytes`` values are wrapped as
``{"__bytes__": "<base64>"}`` on the way out and unwrapped on the way in.
"""

import base64
import binascii
import json
import logging
from typing import Any, Optional

from assetcache.domain.exceptions import SerializationError
from assetcache.domain.interfaces.serializer import Serializer

logger = logging.getLogger(__name__)

BYTES_MARKER = "__bytes__"


def _encode_default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return {BYTES_MARKER: base64.b64encode(bytes(obj)).decode("ascii")}
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _decode_hook(obj: dict) -> Any:
    # A cache id equal to the marker maps to a record dict, not a base64 string
    if len(obj) == 1 and isinstance(obj.get(BYTES_MARKER), str):
        value = obj[BYTES_MARKER]
        try:
            return base64.b64decode(value.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise SerializationError(f"Invalid base64 payload: {e}") from e
    return obj


class JsonSerializer(Serializer):
    """UTF-8 JSON serializer with base64 support for binary values."""

    name = "json"

    def __init__(self, indent: Optional[int] = None, sort_keys: bool = True):
        self.indent = indent
        self.sort_keys = sort_keys

    def serialize(self, obj: Any) -> bytes:
        try:
            text = json.dumps(
                obj,
                default=_encode_default,
                indent=self.indent,
                sort_keys=self.sort_keys,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            logger.error(f"JSON serialization failed: {e}")
            raise SerializationError(f"Failed to serialize to JSON: {e}") from e
        return text.encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        try:
            text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
            return json.loads(text, object_hook=_decode_hook)
        except (UnicodeDecodeError, json.JSONDecodeError, TypeError) as e:
            logger.debug(f"JSON deserialization failed: {e}")
            raise SerializationError(f"Failed to deserialize JSON: {e}") from e
