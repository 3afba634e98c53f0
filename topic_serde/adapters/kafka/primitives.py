"""Primitive Encoders – Kafka serializers for types that need no registry.

Extends the confluent serializers where they exist (string, int32, float64)
and fills in the fixed-width types, raw bytes, UUID and Base64 the same way.
"""
from __future__ import annotations

import base64
import binascii
import logging
from struct import Struct
from typing import Any, Mapping, Optional

from confluent_kafka.serialization import (
    DoubleSerializer,
    IntegerSerializer,
    SerializationContext,
    SerializationError,
    Serializer,
    StringSerializer,
)

from topic_serde.domain.enums import Role

logger = logging.getLogger(__name__)


class ConfigurableSerializer(Serializer):
    """ISP: a serializer that can receive producer options once."""

    def configure(self, options: Mapping[str, Any], role: Role) -> None:
        return None


class StringEncoder(StringSerializer, ConfigurableSerializer):
    """Honours ``<role>.serializer.encoding`` then ``serializer.encoding``."""

    def __init__(self, codec: str = "utf_8") -> None:
        super().__init__(codec)

    def configure(self, options: Mapping[str, Any], role: Role) -> None:
        encoding = options.get(f"{role.value}.serializer.encoding") or options.get("serializer.encoding")
        if encoding:
            self.codec = str(encoding)
            logger.debug("string encoder for %s uses %s", role.value, self.codec)


class IntegerEncoder(IntegerSerializer, ConfigurableSerializer):
    """32-bit big-endian signed int."""


class DoubleEncoder(DoubleSerializer, ConfigurableSerializer):
    """64-bit big-endian IEEE-754 float."""


class _StructEncoder(ConfigurableSerializer):
    _struct: Struct

    def __call__(self, obj: Any, ctx: Optional[SerializationContext] = None) -> Optional[bytes]:
        if obj is None:
            return None
        try:
            return self._struct.pack(obj)
        except Exception as exc:
            raise SerializationError(str(exc)) from exc


class ShortEncoder(_StructEncoder):
    _struct = Struct(">h")


class LongEncoder(_StructEncoder):
    _struct = Struct(">q")


class FloatEncoder(_StructEncoder):
    _struct = Struct(">f")


class BytesEncoder(ConfigurableSerializer):
    """Writes any buffer (bytes, bytearray, memoryview) as-is."""

    def __call__(self, obj: Any, ctx: Optional[SerializationContext] = None) -> Optional[bytes]:
        if obj is None:
            return None
        return bytes(obj)


class UUIDEncoder(ConfigurableSerializer):
    """Writes the canonical string form of a UUID, UTF-8 encoded."""

    def __call__(self, obj: Any, ctx: Optional[SerializationContext] = None) -> Optional[bytes]:
        if obj is None:
            return None
        return str(obj).encode("utf_8")


class Base64Encoder(ConfigurableSerializer):
    """Decodes base64 text into the raw bytes it stands for."""

    def __call__(self, obj: Any, ctx: Optional[SerializationContext] = None) -> Optional[bytes]:
        if obj is None:
            return None
        try:
            return base64.b64decode(obj, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SerializationError(f"invalid base64 payload: {exc}") from exc
