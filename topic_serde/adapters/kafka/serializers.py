"""Kafka Schema Encoders – DIP adapters for SchemaEncoder.

Long-lived, configured once, shared by every topic routed to them. Bytes come
straight from the confluent serializers; nothing here reframes them.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional

from confluent_kafka.schema_registry import (
    SchemaRegistryClient,
    record_subject_name_strategy,
    topic_record_subject_name_strategy,
    topic_subject_name_strategy,
)
from confluent_kafka.schema_registry.avro import AvroSerializer
from confluent_kafka.schema_registry.protobuf import ProtobufSerializer
from confluent_kafka.serialization import SerializationContext, SerializationError
from google.protobuf.message import Message

from topic_serde.domain.enums import Role
from topic_serde.domain.records import AvroRecord
from topic_serde.ports.schema_encoder import SchemaEncoder

logger = logging.getLogger(__name__)

SCHEMA_REGISTRY_URL = "schema.registry.url"

SUBJECT_NAME_STRATEGIES: Dict[str, Callable] = {
    "TopicNameStrategy": topic_subject_name_strategy,
    "TopicRecordNameStrategy": topic_record_subject_name_strategy,
    "RecordNameStrategy": record_subject_name_strategy,
}

_PASS_THROUGH_FLAGS = ("auto.register.schemas", "use.latest.version", "normalize.schemas")


def _as_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() == "true"
    return bool(v)


def registry_client_conf(options: Mapping[str, Any]) -> Dict[str, Any]:
    conf = {"url": options[SCHEMA_REGISTRY_URL]}
    if options.get("basic.auth.user.info"):
        conf["basic.auth.user.info"] = options["basic.auth.user.info"]
    return conf


def serializer_conf(options: Mapping[str, Any], role: Role) -> Dict[str, Any]:
    """Translate producer options into confluent serializer conf for ``role``."""
    conf: Dict[str, Any] = {}
    for flag in _PASS_THROUGH_FLAGS:
        if flag in options:
            conf[flag] = _as_bool(options[flag])
    strategy = options.get(f"{role.value}.subject.name.strategy")
    if strategy:
        name = str(strategy).rsplit(".", 1)[-1]
        try:
            conf["subject.name.strategy"] = SUBJECT_NAME_STRATEGIES[name]
        except KeyError as exc:
            raise ValueError(f"unknown subject name strategy: {strategy}") from exc
    return conf


class _RegistryEncoder(SchemaEncoder):
    """SRP: hold the registry client and one serializer per schema key."""

    kind = "registry"

    def __init__(self) -> None:
        self._client: Optional[SchemaRegistryClient] = None
        self._conf: Dict[str, Any] = {}
        self._role = Role.VALUE
        self._serializers: Dict[Any, Callable] = {}
        self._lock = threading.Lock()

    def configure(self, options: Mapping[str, Any], role: Role) -> None:
        self._client = SchemaRegistryClient(registry_client_conf(options))
        self._conf = serializer_conf(options, role)
        self._role = role
        with self._lock:
            self._serializers.clear()
        logger.info("%s encoder configured for %s against %s", self.kind, role.value, options[SCHEMA_REGISTRY_URL])

    def _serializer_for(self, cache_key: Any, factory: Callable[[SchemaRegistryClient], Callable]) -> Callable:
        if self._client is None:
            raise SerializationError(f"{self.kind} encoder used without {SCHEMA_REGISTRY_URL}")
        with self._lock:
            serializer = self._serializers.get(cache_key)
            if serializer is None:
                serializer = factory(self._client)
                self._serializers[cache_key] = serializer
            return serializer

    def _context(self, topic: str) -> SerializationContext:
        return SerializationContext(topic, self._role.field)


class AvroRegistryEncoder(_RegistryEncoder):
    """Avro with Schema Registry framing; expects an AvroRecord."""

    kind = "avro"

    def encode(self, topic: str, value: Any) -> bytes:
        if not isinstance(value, AvroRecord):
            raise SerializationError(
                f"avro encoder expects AvroRecord, got {type(value).__name__}"
            )
        serializer = self._serializer_for(
            value.schema_str,
            lambda client: AvroSerializer(client, value.schema_str, conf=dict(self._conf)),
        )
        return serializer(dict(value.value), self._context(topic))


class ProtobufRegistryEncoder(_RegistryEncoder):
    """Protobuf with Schema Registry framing; expects a generated message."""

    kind = "protobuf"

    def encode(self, topic: str, value: Any) -> bytes:
        if not isinstance(value, Message):
            raise SerializationError(
                f"protobuf encoder expects a protobuf Message, got {type(value).__name__}"
            )
        msg_type = type(value)
        serializer = self._serializer_for(
            msg_type,
            lambda client: ProtobufSerializer(msg_type, client, dict(self._conf)),
        )
        return serializer(value, self._context(topic))
