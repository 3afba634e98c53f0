"""SRP: one place to parse and hold configuration.

Keep it simple; no side effects beyond reading environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

from topic_serde.adapters.kafka.serializers import SCHEMA_REGISTRY_URL
from topic_serde.ports.topic_configs import TopicConfigRepository
from topic_serde.services.dispatcher import CLUSTER_ID, CONFIG_LOOKUP


@dataclass(frozen=True)
class Config:
    """DIP: the app consumes Config, not raw env."""

    # Kafka
    bootstrap: str = os.getenv("KAFKA_BOOTSTRAP", "localhost:9092")
    schema_registry: str = os.getenv("SCHEMA_REGISTRY_URL", "")  # empty: no registry
    cluster_id: str = os.getenv("CLUSTER_ID", "default")

    # Topic message types
    topic_config_dir: str = os.getenv("TOPIC_CONFIG_DIR", "./topic-configs")

    # Serializer tuning
    auto_register_schemas: bool = os.getenv("AUTO_REGISTER_SCHEMAS", "true").lower() == "true"
    key_subject_name_strategy: str = os.getenv("KEY_SUBJECT_NAME_STRATEGY", "")
    value_subject_name_strategy: str = os.getenv("VALUE_SUBJECT_NAME_STRATEGY", "")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def serializer_options(self, lookup: TopicConfigRepository) -> Dict[str, Any]:
        """Options handed to TopicSerializer.configure."""
        options: Dict[str, Any] = {
            CLUSTER_ID: self.cluster_id,
            CONFIG_LOOKUP: lookup,
            "auto.register.schemas": self.auto_register_schemas,
        }
        if self.schema_registry:
            options[SCHEMA_REGISTRY_URL] = self.schema_registry
        if self.key_subject_name_strategy:
            options["key.subject.name.strategy"] = self.key_subject_name_strategy
        if self.value_subject_name_strategy:
            options["value.subject.name.strategy"] = self.value_subject_name_strategy
        return options
