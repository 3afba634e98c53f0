"""DIP Port – SchemaEncoder.

Decouple the dispatcher from registry specifics. Encode to bytes for a given topic.
"""
from typing import Any, Mapping

from topic_serde.domain.enums import Role


class SchemaEncoder:
    """ISP: just enough to turn native values into registry-framed wire bytes.

    configure: receive producer options once, before the first encode.
    encode: return the codec's bytes for a topic, unaltered.
    """

    def configure(self, options: Mapping[str, Any], role: Role) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def encode(self, topic: str, value: Any) -> bytes:  # pragma: no cover - interface only
        raise NotImplementedError
