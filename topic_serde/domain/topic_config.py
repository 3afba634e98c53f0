"""Topic message type config – per-topic key/value wire formats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from topic_serde.domain.enums import MessageType, Role


@dataclass(frozen=True)
class TopicMessageTypeConfig:
    """SRP: holds which message type a topic uses for keys and for values."""

    topic: str
    key_type: MessageType = MessageType.STRING
    value_type: MessageType = MessageType.STRING

    def type_for(self, role: Role) -> MessageType:
        return self.key_type if role is Role.KEY else self.value_type

    @classmethod
    def from_dict(cls, raw: Mapping[str, str]) -> "TopicMessageTypeConfig":
        """Build from the JSON shape ``{"name", "keyType", "valueType"}``."""
        return cls(
            topic=raw["name"],
            key_type=MessageType.from_name(raw.get("keyType", MessageType.STRING.value)),
            value_type=MessageType.from_name(raw.get("valueType", MessageType.STRING.value)),
        )
