"""Kafka Publisher – DIP adapter for EventPublisher.

Backpressure-safe publish wrapping SerializingProducer.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from confluent_kafka import SerializingProducer

from topic_serde.ports.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


def _on_delivery(err, msg) -> None:
    if err:
        logger.error("delivery failed: %s", err)
    else:
        logger.debug("delivered to %s [%s] @ %s", msg.topic(), msg.partition(), msg.offset())


class KafkaPublisher(EventPublisher):
    """SRP: only concern is delivery to Kafka.

    Serialization happens inside the producer, through the topic serializers.
    """

    def __init__(self, producer: SerializingProducer) -> None:
        self._producer = producer

    def publish(
        self,
        topic: str,
        key: Any,
        value: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        while True:
            try:
                self._producer.produce(
                    topic=topic,
                    key=key,
                    value=value,
                    headers=list((headers or {}).items()),
                    on_delivery=_on_delivery,
                )
                break
            except BufferError:
                self._producer.poll(0.05)

    def poll(self) -> None:
        self._producer.poll(0)

    def flush(self, timeout: float = 15.0) -> int:
        return self._producer.flush(timeout)
