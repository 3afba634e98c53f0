"""Shared fixtures for topic serializer tests."""

import json
import struct

import pytest

from topic_serde.adapters.config.topic_configs import InMemoryTopicConfigRepository
from topic_serde.domain.enums import MessageType, Role
from topic_serde.domain.records import AvroRecord
from topic_serde.domain.topic_config import TopicMessageTypeConfig
from topic_serde.ports.schema_encoder import SchemaEncoder
from topic_serde.services.dispatcher import CLUSTER_ID, CONFIG_LOOKUP, TopicSerializer

CLUSTER = "local"
REGISTRY_URL = "http://registry.test:8081"


class FakeRegistryEncoder(SchemaEncoder):
    """Frames payloads like the registry does: magic byte 0 + 4-byte schema id."""

    def __init__(self, schema_id: int) -> None:
        self.schema_id = schema_id
        self.configured_with = None
        self.calls = []

    def configure(self, options, role):
        self.configured_with = (dict(options), role)

    def payload(self, value) -> bytes:
        raise NotImplementedError

    def encode(self, topic, value):
        if self.configured_with is None:
            raise RuntimeError("encoder not configured")
        self.calls.append((topic, value))
        return b"\x00" + struct.pack(">I", self.schema_id) + self.payload(value)


class FakeAvroEncoder(FakeRegistryEncoder):
    def payload(self, value):
        return json.dumps(dict(value.value), sort_keys=True).encode("utf-8")


class FakeProtobufEncoder(FakeRegistryEncoder):
    def payload(self, value):
        return value.SerializeToString(deterministic=True)


@pytest.fixture
def topic_configs():
    return InMemoryTopicConfigRepository(
        [
            (CLUSTER, TopicMessageTypeConfig("orders", MessageType.STRING, MessageType.STRING)),
            (CLUSTER, TopicMessageTypeConfig("events", MessageType.STRING, MessageType.AVRO)),
            (CLUSTER, TopicMessageTypeConfig("proto-events", MessageType.UUID, MessageType.PROTOBUF_SR)),
        ]
    )


@pytest.fixture
def options(topic_configs):
    return {
        CLUSTER_ID: CLUSTER,
        CONFIG_LOOKUP: topic_configs,
        "schema.registry.url": REGISTRY_URL,
    }


@pytest.fixture
def avro_encoder():
    return FakeAvroEncoder(schema_id=7)


@pytest.fixture
def protobuf_encoder():
    return FakeProtobufEncoder(schema_id=11)


@pytest.fixture
def value_serializer(options, avro_encoder, protobuf_encoder):
    serializer = TopicSerializer(avro_encoder, protobuf_encoder)
    serializer.configure(options, Role.VALUE)
    return serializer


@pytest.fixture
def key_serializer(options, avro_encoder, protobuf_encoder):
    serializer = TopicSerializer(avro_encoder, protobuf_encoder)
    serializer.configure(options, Role.KEY)
    return serializer


@pytest.fixture
def order_record():
    return AvroRecord(
        schema_str=json.dumps(
            {
                "type": "record",
                "name": "Order",
                "namespace": "demo",
                "fields": [
                    {"name": "order_id", "type": "string"},
                    {"name": "amount", "type": "double"},
                ],
            }
        ),
        value={"order_id": "o_1", "amount": 12.5},
    )
