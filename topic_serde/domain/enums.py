"""Enums – SRP: centralize the message types and how they are classified.

Class membership is fixed here; nothing else decides which path a type takes.
"""
from __future__ import annotations

from enum import Enum

from confluent_kafka.serialization import MessageField

from topic_serde.domain.errors import UnsupportedEncodingKind


class MessageType(Enum):
    """Wire format selected per topic and role."""

    STRING = "STRING"
    SHORT = "SHORT"
    INTEGER = "INTEGER"
    LONG = "LONG"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    BYTEARRAY = "BYTEARRAY"
    BYTEBUFFER = "BYTEBUFFER"
    BYTES = "BYTES"
    BASE64 = "BASE64"
    UUID = "UUID"
    AVRO = "AVRO"
    AVRO_TOPIC_RECORD_NAME_STRATEGY = "AVRO_TOPIC_RECORD_NAME_STRATEGY"
    PROTOBUF_SR = "PROTOBUF_SR"

    @classmethod
    def from_name(cls, name: str) -> "MessageType":
        try:
            return cls(name)
        except ValueError as exc:
            raise UnsupportedEncodingKind(name) from exc


class EncodingClass(Enum):
    SCHEMA_REGISTRY_AVRO = "schema_registry_avro"
    SCHEMA_REGISTRY_PROTOBUF = "schema_registry_protobuf"
    PRIMITIVE = "primitive"


class Role(Enum):
    """Whether a payload is the record key or the record value."""

    KEY = "key"
    VALUE = "value"

    @property
    def is_key(self) -> bool:
        return self is Role.KEY

    @property
    def field(self) -> str:
        return MessageField.KEY if self is Role.KEY else MessageField.VALUE


AVRO_TYPES = frozenset({MessageType.AVRO, MessageType.AVRO_TOPIC_RECORD_NAME_STRATEGY})
PROTOBUF_TYPES = frozenset({MessageType.PROTOBUF_SR})
REQUIRES_SCHEMA_REGISTRY_TYPES = AVRO_TYPES | PROTOBUF_TYPES
PRIMITIVE_TYPES = frozenset(t for t in MessageType if t not in REQUIRES_SCHEMA_REGISTRY_TYPES)


def classify(kind: MessageType) -> EncodingClass:
    """Return the encoding class of ``kind``. (Pure function)"""
    if kind in AVRO_TYPES:
        return EncodingClass.SCHEMA_REGISTRY_AVRO
    if kind in PROTOBUF_TYPES:
        return EncodingClass.SCHEMA_REGISTRY_PROTOBUF
    return EncodingClass.PRIMITIVE
