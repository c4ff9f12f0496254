"""Serializer selection by configured name."""

import logging
from typing import Callable, Dict

from assetcache.domain.interfaces.serializer import Serializer
from assetcache.infrastructure.serialization.json_serializer import JsonSerializer
from assetcache.infrastructure.serialization.yaml_serializer import YamlSerializer

logger = logging.getLogger(__name__)

SERIALIZERS: Dict[str, Callable[[], Serializer]] = {
    JsonSerializer.name: JsonSerializer,
    YamlSerializer.name: YamlSerializer,
}


def get_serializer(name: str) -> Serializer:
    """Returns a new serializer for ``name`` ('json' or 'yaml').

    Raises:
        ValueError: If no serializer is registered under that name.
    """
    key = (name or "").strip().lower()
    if key == "yml":
        key = YamlSerializer.name
    if key not in SERIALIZERS:
        raise ValueError(f"Unknown serializer '{name}'. Available: {', '.join(sorted(SERIALIZERS))}")
    logger.debug(f"Using serializer: {key}")
    return SERIALIZERS[key]()
