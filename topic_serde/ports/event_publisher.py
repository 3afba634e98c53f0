"""DIP Port – EventPublisher.

Speak in the language of the caller. The infrastructure serializes and delivers.
"""
from typing import Any, Mapping, Optional


class EventPublisher:
    """ISP: a narrow interface sufficient for producing one record.

    publish: hand key and value to the topic's serializers and send.
    """

    def publish(
        self,
        topic: str,
        key: Any,
        value: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def poll(self) -> None:  # pragma: no cover - interface only
        """Serve delivery callbacks without blocking."""
        raise NotImplementedError

    def flush(self, timeout: float = 15.0) -> int:  # pragma: no cover - interface only
        raise NotImplementedError
