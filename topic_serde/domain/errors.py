"""Custom exceptions for topic serialization."""
from __future__ import annotations

from typing import Any


class TopicSerdeError(Exception):
    """Base for every error raised by the dispatcher."""


class UnsupportedEncodingKind(TopicSerdeError):
    """Raised for a message type outside the closed set or without a strategy."""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"no serializer for message type: {kind}")


class UnsupportedValueForEncoding(TopicSerdeError):
    """Raised when the value's runtime type does not fit the resolved message type."""

    def __init__(self, kind: Any, observed_type: type) -> None:
        self.kind = kind
        self.observed_type = observed_type
        super().__init__(
            f"serializer for message type {kind} does not support serializing type: "
            f"{observed_type.__name__}"
        )


class RoleResolutionImpossible(TopicSerdeError):
    """Raised when serialization is requested without a topic."""

    def __init__(self) -> None:
        super().__init__("can't serialize without topic name")


class NotConfigured(TopicSerdeError):
    """Raised when serialize is called before configure."""


class AlreadyConfigured(TopicSerdeError):
    """Raised when configure is called a second time."""


class UnknownTopic(TopicSerdeError):
    """Raised when no message type config exists for a topic."""

    def __init__(self, cluster_id: str | None, topic: str) -> None:
        self.cluster_id = cluster_id
        self.topic = topic
        super().__init__(f"no message type config for topic {topic!r} on cluster {cluster_id!r}")


class ConfigError(TopicSerdeError):
    """Raised when a topic config file is invalid."""
