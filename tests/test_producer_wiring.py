"""Tests for config, factory wiring and the publisher."""

import logging

from topic_serde.adapters.config.topic_configs import InMemoryTopicConfigRepository
from topic_serde.adapters.kafka.factory import build_serializers
from topic_serde.adapters.kafka.publisher import KafkaPublisher, _on_delivery
from topic_serde.config import Config
from topic_serde.domain.enums import MessageType
from topic_serde.domain.topic_config import TopicMessageTypeConfig
from topic_serde.services.dispatcher import CLUSTER_ID, CONFIG_LOOKUP


class FakeProducer:
    def __init__(self, buffer_errors=0):
        self.buffer_errors = buffer_errors
        self.produced = []
        self.polls = []

    def produce(self, **kwargs):
        if self.buffer_errors:
            self.buffer_errors -= 1
            raise BufferError("queue full")
        self.produced.append(kwargs)

    def poll(self, timeout):
        self.polls.append(timeout)
        return 0

    def flush(self, timeout):
        return 0


class FakeMessage:
    def topic(self):
        return "orders"

    def partition(self):
        return 0

    def offset(self):
        return 3


class TestConfig:
    def test_options_without_registry(self):
        lookup = InMemoryTopicConfigRepository()
        options = Config(schema_registry="", cluster_id="c1").serializer_options(lookup)

        assert options[CLUSTER_ID] == "c1"
        assert options[CONFIG_LOOKUP] is lookup
        assert "schema.registry.url" not in options

    def test_options_with_registry_and_strategy(self):
        options = Config(
            schema_registry="http://sr:8081",
            value_subject_name_strategy="TopicRecordNameStrategy",
        ).serializer_options(InMemoryTopicConfigRepository())

        assert options["schema.registry.url"] == "http://sr:8081"
        assert options["value.subject.name.strategy"] == "TopicRecordNameStrategy"
        assert "key.subject.name.strategy" not in options


class TestBuildSerializers:
    def test_one_serializer_per_role(self):
        lookup = InMemoryTopicConfigRepository(
            [("c1", TopicMessageTypeConfig("orders", MessageType.INTEGER, MessageType.STRING))]
        )

        key_serializer, value_serializer = build_serializers(Config(schema_registry="", cluster_id="c1"), lookup)

        assert key_serializer.serialize("orders", "1") == b"\x00\x00\x00\x01"
        assert value_serializer.serialize("orders", "1") == b"1"


class TestKafkaPublisher:
    def test_publish(self):
        producer = FakeProducer()

        KafkaPublisher(producer).publish("orders", "k", "v", {"trace": "t1"})

        (sent,) = producer.produced
        assert sent["topic"] == "orders"
        assert sent["key"] == "k"
        assert sent["value"] == "v"
        assert sent["headers"] == [("trace", "t1")]

    def test_retries_on_full_queue(self):
        producer = FakeProducer(buffer_errors=2)

        KafkaPublisher(producer).publish("orders", None, "v")

        assert len(producer.produced) == 1
        assert producer.polls == [0.05, 0.05]

    def test_flush_and_poll(self):
        producer = FakeProducer()
        publisher = KafkaPublisher(producer)

        publisher.poll()

        assert publisher.flush(1.0) == 0
        assert producer.polls == [0]

    def test_delivery_error_logged(self, caplog):
        with caplog.at_level(logging.ERROR):
            _on_delivery("broker down", None)

        assert "broker down" in caplog.text

    def test_delivery_success_not_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            _on_delivery(None, FakeMessage())

        assert caplog.text == ""
