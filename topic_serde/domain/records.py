"""Native Avro record – a value together with its writer schema."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class AvroRecord:
    """Keep the schema next to the data, the way a generic record does."""

    schema_str: str
    value: Mapping[str, Any] = field(default_factory=dict)
