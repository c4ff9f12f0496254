"""YAML implementation of the Serializer interface, backed by PyYAML.

Only the safe loader/dumper are used. ``bytes`` values map to the standard
``!!binary`` tag, so no custom encoding is needed.
"""

import logging
from typing import Any

import yaml

from assetcache.domain.exceptions import SerializationError
from assetcache.domain.interfaces.serializer import Serializer

logger = logging.getLogger(__name__)


class YamlSerializer(Serializer):
    """UTF-8 YAML serializer.

    Non-ASCII characters are always written as escapes, so ids containing
    U+0085 or U+2028 load back unchanged.
    """

    name = "yaml"

    def serialize(self, obj: Any) -> bytes:
        try:
            text = yaml.safe_dump(obj, allow_unicode=False, sort_keys=True, default_flow_style=False)
        except yaml.YAMLError as e:
            logger.error(f"YAML serialization failed: {e}")
            raise SerializationError(f"Failed to serialize to YAML: {e}") from e
        return text.encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        try:
            text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
            return yaml.safe_load(text)
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            logger.debug(f"YAML deserialization failed: {e}")
            raise SerializationError(f"Failed to deserialize YAML: {e}") from e
