"""Strategy Table – SRP: map each primitive message type to parse + encode.

Built once, read-only afterwards; safe to share across producer threads.
"""
from __future__ import annotations

import math
import re
import struct
import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from topic_serde.adapters.kafka.primitives import (
    Base64Encoder,
    BytesEncoder,
    ConfigurableSerializer,
    DoubleEncoder,
    FloatEncoder,
    IntegerEncoder,
    LongEncoder,
    ShortEncoder,
    StringEncoder,
    UUIDEncoder,
)
from topic_serde.domain.enums import MessageType, PRIMITIVE_TYPES
from topic_serde.domain.errors import UnsupportedEncodingKind


@dataclass(frozen=True)
class StrategyEntry:
    """Text -> typed value -> bytes."""

    parse: Callable[[str], Any]
    serializer: ConfigurableSerializer

    def encode(self, text: str, ctx=None) -> bytes:
        return self.serializer(self.parse(text), ctx)


_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(NaN|Infinity|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)[fFdD]?")
_UUID = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_FLOAT32 = struct.Struct(">f")


def _bounded_int(bits: int) -> Callable[[str], int]:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def parse(text: str) -> int:
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"invalid {bits}-bit integer: {text!r}")
        value = int(text)
        if not low <= value <= high:
            raise ValueError(f"value out of range for {bits}-bit integer: {text}")
        return value

    return parse


def _to_double(text: str) -> float:
    # surrounding whitespace is allowed, digit separators and "inf" spellings are not
    stripped = text.strip()
    if not _DECIMAL.fullmatch(stripped):
        raise ValueError(f"invalid floating point number: {text!r}")
    return float(stripped.rstrip("fFdD"))


def _to_float(text: str) -> float:
    """Parse as double, then round to float32; overflow becomes signed infinity."""
    value = _to_double(text)
    try:
        _FLOAT32.pack(value)
    except (OverflowError, struct.error):
        return math.copysign(math.inf, value)
    return value


def _to_uuid(text: str) -> uuid.UUID:
    if not _UUID.fullmatch(text):
        raise ValueError(f"invalid UUID string: {text!r}")
    return uuid.UUID(text)


def _identity(text: str) -> str:
    return text


def _to_bytes(text: str) -> bytes:
    return text.encode("utf_8")


def _to_bytearray(text: str) -> bytearray:
    return bytearray(text.encode("utf_8"))


def _to_memoryview(text: str) -> memoryview:
    return memoryview(text.encode("utf_8"))


def strategy_for(kind: MessageType) -> StrategyEntry:
    """Build the entry for one primitive type; anything else is a contract violation."""
    if kind not in PRIMITIVE_TYPES:
        raise UnsupportedEncodingKind(kind)
    if kind is MessageType.STRING:
        return StrategyEntry(_identity, StringEncoder())
    if kind is MessageType.SHORT:
        return StrategyEntry(_bounded_int(16), ShortEncoder())
    if kind is MessageType.INTEGER:
        return StrategyEntry(_bounded_int(32), IntegerEncoder())
    if kind is MessageType.LONG:
        return StrategyEntry(_bounded_int(64), LongEncoder())
    if kind is MessageType.FLOAT:
        return StrategyEntry(_to_float, FloatEncoder())
    if kind is MessageType.DOUBLE:
        return StrategyEntry(_to_double, DoubleEncoder())
    if kind is MessageType.BYTEARRAY:
        return StrategyEntry(_to_bytes, BytesEncoder())
    if kind is MessageType.BYTEBUFFER:
        return StrategyEntry(_to_bytearray, BytesEncoder())
    if kind is MessageType.BYTES:
        return StrategyEntry(_to_memoryview, BytesEncoder())
    if kind is MessageType.BASE64:
        # passed through untouched; the encoder does the decoding
        return StrategyEntry(_identity, Base64Encoder())
    if kind is MessageType.UUID:
        return StrategyEntry(_to_uuid, UUIDEncoder())
    raise UnsupportedEncodingKind(kind)


def build() -> Mapping[MessageType, StrategyEntry]:
    """Return an immutable table with one entry per primitive type."""
    return MappingProxyType({kind: strategy_for(kind) for kind in MessageType if kind in PRIMITIVE_TYPES})
