"""Value serializers for cache payloads"""

import json
import pickle
from abc import ABC, abstractmethod
from typing import Any


class Serializer(ABC):
    """Abstract base class for value serializers"""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode a value for storage

        Args:
            value: Value to store

        Returns:
            Byte payload
        """
        pass

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode a stored payload

        Args:
            data: Byte payload previously produced by encode()

        Returns:
            The reconstructed value
        """
        pass


class PickleSerializer(Serializer):
    """Serializer for arbitrary picklable Python values

    Only use with stores you trust: unpickling executes code embedded
    in the payload.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def encode(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def decode(self, data: bytes) -> Any:
        return pickle.loads(data)


class JsonSerializer(Serializer):
    """Serializer for JSON-compatible values"""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode(self.encoding)

    def decode(self, data: bytes | str) -> Any:
        if isinstance(data, bytes):
            data = data.decode(self.encoding)
        return json.loads(data)


SERIALIZERS: dict[str, type[Serializer]] = {
    "pickle": PickleSerializer,
    "json": JsonSerializer,
}


def get_serializer(name: str = "pickle") -> Serializer:
    """Get a serializer instance by name

    Args:
        name: Serializer name ("pickle" or "json")

    Returns:
        Serializer instance

    Raises:
        ValueError: If the serializer name is not supported
    """
    try:
        return SERIALIZERS[name]()
    except KeyError:
        msg = f"Unsupported serializer: {name}. Supported: {', '.join(SERIALIZERS)}"
        raise ValueError(msg) from None
