"""Interface for serializers.

A serializer turns the storage document (plain dicts, strings and bytes)
into the byte representation written to disk, and back again. The engine
only relies on ``deserialize(serialize(doc)) == doc``.
"""

import abc
from typing import Any


class Serializer(abc.ABC):
    """Abstract Base Class for document serializers."""

    #: Short name used in configuration ('json', 'yaml', ...)
    name: str = ""

    @abc.abstractmethod
    def serialize(self, obj: Any) -> bytes:
        """Encodes a document.

        Args:
            obj: The document to encode. May contain ``bytes`` values.

        Returns:
            The encoded representation.

        Raises:
            SerializationError: If the document cannot be encoded.
        """
        pass

    @abc.abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Decodes a document previously produced by ``serialize``.

        Args:
            data: The encoded representation.

        Returns:
            The decoded document.

        Raises:
            SerializationError: If the data cannot be decoded.
        """
        pass
