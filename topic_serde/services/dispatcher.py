"""Topic Serializer – picks one wire format per record and encodes it.

Routing, in order:
- Avro family -> Avro registry encoder, value forwarded unchanged
- PROTOBUF_SR -> Protobuf registry encoder; JSON text is parsed into a Struct first
- anything else -> primitive strategy table, value must be text

The message type is looked up on every call, so topic config edits apply
to the next record.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from confluent_kafka.serialization import SerializationContext, Serializer
from google.protobuf import json_format
from google.protobuf.message import Message
from google.protobuf.struct_pb2 import Struct

from topic_serde.adapters.kafka.serializers import (
    SCHEMA_REGISTRY_URL,
    AvroRegistryEncoder,
    ProtobufRegistryEncoder,
)
from topic_serde.domain.enums import EncodingClass, MessageType, Role, classify
from topic_serde.domain.errors import (
    AlreadyConfigured,
    NotConfigured,
    RoleResolutionImpossible,
    UnknownTopic,
    UnsupportedEncodingKind,
    UnsupportedValueForEncoding,
)
from topic_serde.ports.schema_encoder import SchemaEncoder
from topic_serde.ports.topic_configs import TopicConfigRepository
from topic_serde.services import strategies

logger = logging.getLogger(__name__)

CLUSTER_ID = "topicserde.cluster.id"
CONFIG_LOOKUP = "topicserde.config.lookup"


@dataclass(frozen=True)
class _Configured:
    role: Role
    cluster_id: Optional[str]
    config_lookup: Optional[TopicConfigRepository]


def json_to_message(text: str) -> Message:
    """Parse JSON text into a protobuf Struct."""
    return json_format.Parse(text, Struct())


class TopicSerializer(Serializer):
    """SRP: resolve the message type for (topic, role) and route to one encoder.

    One instance per role; configure once before sharing across threads.
    """

    def __init__(
        self,
        avro_encoder: Optional[SchemaEncoder] = None,
        protobuf_encoder: Optional[SchemaEncoder] = None,
    ) -> None:
        self._strategies = strategies.build()
        self._avro = avro_encoder or AvroRegistryEncoder()
        self._protobuf = protobuf_encoder or ProtobufRegistryEncoder()
        self._state: Optional[_Configured] = None

    @property
    def configured(self) -> bool:
        return self._state is not None

    def configure(self, options: Mapping[str, Any], role: Role) -> None:
        if self._state is not None:
            raise AlreadyConfigured(f"serializer already configured for {self._state.role.value}")

        for entry in self._strategies.values():
            entry.serializer.configure(options, role)
        if options.get(SCHEMA_REGISTRY_URL) is not None:
            self._avro.configure(options, role)
            self._protobuf.configure(options, role)
        else:
            logger.info("no %s given; registry-backed types stay unavailable", SCHEMA_REGISTRY_URL)

        self._state = _Configured(
            role=role,
            cluster_id=options.get(CLUSTER_ID),
            config_lookup=options.get(CONFIG_LOOKUP),
        )
        logger.info("topic serializer configured for %s (cluster=%s)", role.value, self._state.cluster_id)

    def resolve(self, topic: str) -> MessageType:
        """Return the message type for ``topic`` in this serializer's role."""
        state = self._state
        if state is None:
            raise NotConfigured("configure() must be called before serialize()")
        topic_config = None
        if state.config_lookup is not None:
            topic_config = state.config_lookup.get_config_for_topic(state.cluster_id, topic)
        if topic_config is None:
            raise UnknownTopic(state.cluster_id, topic)
        return topic_config.type_for(state.role)

    def serialize(self, topic: str, value: Any) -> Optional[bytes]:
        kind = self.resolve(topic)
        if value is None:
            return None

        encoding = classify(kind)
        if encoding is EncodingClass.SCHEMA_REGISTRY_AVRO:
            logger.debug("topic=%s kind=%s -> avro encoder", topic, kind.value)
            return self._avro.encode(topic, value)

        if encoding is EncodingClass.SCHEMA_REGISTRY_PROTOBUF:
            if isinstance(value, Message):
                logger.debug("topic=%s kind=%s -> protobuf encoder", topic, kind.value)
                return self._protobuf.encode(topic, value)
            if isinstance(value, str):
                logger.debug("topic=%s kind=%s -> protobuf encoder (from json)", topic, kind.value)
                return self._protobuf.encode(topic, json_to_message(value))
            raise UnsupportedValueForEncoding(kind, type(value))

        entry = self._strategies.get(kind)
        if entry is None:
            raise UnsupportedEncodingKind(kind)
        if not isinstance(value, str):
            raise UnsupportedValueForEncoding(kind, type(value))
        logger.debug("topic=%s kind=%s -> primitive", topic, kind.value)
        return entry.encode(value, SerializationContext(topic, self._state.role.field))

    def serialize_without_topic(self, value: Any) -> bytes:
        raise RoleResolutionImpossible()

    def __call__(self, obj: Any, ctx: Optional[SerializationContext] = None) -> Optional[bytes]:
        if ctx is None:
            return self.serialize_without_topic(obj)
        return self.serialize(ctx.topic, obj)

    def close(self) -> None:
        return None
