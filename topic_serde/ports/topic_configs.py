"""DIP Port – TopicConfigRepository.

SRP: define the lookup; implementations live under adapters/config.
"""
from typing import Optional

from topic_serde.domain.topic_config import TopicMessageTypeConfig


class TopicConfigRepository:
    def get_config_for_topic(
        self, cluster_id: Optional[str], topic: str
    ) -> Optional[TopicMessageTypeConfig]:  # pragma: no cover - interface only
        """Return the config for ``topic`` or None when the topic is unknown."""
        raise NotImplementedError
