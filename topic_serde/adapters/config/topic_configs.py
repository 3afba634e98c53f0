"""Topic config repositories – DIP adapters for TopicConfigRepository.

Both read through on every lookup so edits apply to the next record produced.
"""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from topic_serde.domain.errors import ConfigError
from topic_serde.domain.topic_config import TopicMessageTypeConfig
from topic_serde.ports.topic_configs import TopicConfigRepository

logger = logging.getLogger(__name__)

TOPICS_FILE = "topics.json"


class InMemoryTopicConfigRepository(TopicConfigRepository):
    """SRP: a dict keyed by (cluster, topic), safe to edit while producing."""

    def __init__(self, configs: Iterable[Tuple[str, TopicMessageTypeConfig]] = ()) -> None:
        self._lock = threading.Lock()
        self._configs: Dict[Tuple[Optional[str], str], TopicMessageTypeConfig] = {}
        for cluster_id, cfg in configs:
            self.put(cluster_id, cfg)

    def put(self, cluster_id: Optional[str], cfg: TopicMessageTypeConfig) -> None:
        with self._lock:
            self._configs[(cluster_id, cfg.topic)] = cfg

    def remove(self, cluster_id: Optional[str], topic: str) -> None:
        with self._lock:
            self._configs.pop((cluster_id, topic), None)

    def get_config_for_topic(self, cluster_id: Optional[str], topic: str) -> Optional[TopicMessageTypeConfig]:
        with self._lock:
            return self._configs.get((cluster_id, topic))


class JsonTopicConfigRepository(TopicConfigRepository):
    """
    Reads ``<root>/<cluster_id>/topics.json``.

    File shape: ``[{"name": "orders", "keyType": "STRING", "valueType": "AVRO"}]``.
    A missing file means no topics are configured for that cluster.
    """

    def __init__(self, root: str) -> None:
        self._root = Path(root)

    def path_for(self, cluster_id: Optional[str]) -> Path:
        return self._root / (cluster_id or "default") / TOPICS_FILE

    def load(self, cluster_id: Optional[str]) -> Dict[str, TopicMessageTypeConfig]:
        path = self.path_for(cluster_id)
        if not path.exists():
            logger.debug("no topic config file at %s", path)
            return {}

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in topic config file {path}: {exc}") from exc

        if not isinstance(raw, list):
            raise ConfigError(f"Topic config file {path} must hold a list")
        for item in raw:
            if not isinstance(item, dict) or "name" not in item:
                raise ConfigError(f"Each topic entry in {path} must include 'name'")

        configs = [TopicMessageTypeConfig.from_dict(item) for item in raw]
        return {cfg.topic: cfg for cfg in configs}

    def get_config_for_topic(self, cluster_id: Optional[str], topic: str) -> Optional[TopicMessageTypeConfig]:
        return self.load(cluster_id).get(topic)
