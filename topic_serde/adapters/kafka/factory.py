"""Kafka Factory – SRP: build topic serializers and the producer around them.

DIP: callers receive ports, not concrete libs.
"""
from __future__ import annotations

from typing import Tuple

from confluent_kafka import SerializingProducer

from topic_serde.config import Config
from topic_serde.adapters.kafka.publisher import KafkaPublisher
from topic_serde.domain.enums import Role
from topic_serde.ports.topic_configs import TopicConfigRepository
from topic_serde.services.dispatcher import TopicSerializer


def build_serializers(config: Config, lookup: TopicConfigRepository) -> Tuple[TopicSerializer, TopicSerializer]:
    """One configured serializer per role, as the producer expects."""
    options = config.serializer_options(lookup)
    key_serializer = TopicSerializer()
    key_serializer.configure(options, Role.KEY)
    value_serializer = TopicSerializer()
    value_serializer.configure(options, Role.VALUE)
    return key_serializer, value_serializer


def build_kafka(config: Config, lookup: TopicConfigRepository) -> KafkaPublisher:
    key_serializer, value_serializer = build_serializers(config, lookup)

    producer = SerializingProducer(
        {
            "bootstrap.servers": config.bootstrap,
            "enable.idempotence": True,
            "acks": "all",
            "linger.ms": 25,
            "compression.type": "lz4",
            "key.serializer": key_serializer,
            "value.serializer": value_serializer,
        }
    )
    return KafkaPublisher(producer)
