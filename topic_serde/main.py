"""Topic Serde Producer

Produces one record whose key and value are typed per topic:
- topics.json per cluster says which message type a topic uses for keys and values
- primitive types (STRING, INTEGER, UUID, BASE64, ...) are given as text
- PROTOBUF_SR goes through Schema Registry and accepts JSON text
- AVRO types go through Schema Registry too; pass JSON text plus --key-schema/--value-schema

SRP: this module only wires and runs; routing lives in services.dispatcher.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from topic_serde.config import Config
from topic_serde.adapters.config.topic_configs import JsonTopicConfigRepository
from topic_serde.adapters.kafka.factory import build_kafka
from topic_serde.domain.records import AvroRecord

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Produce one record using per-topic message types")
    parser.add_argument("--topic", required=True)
    parser.add_argument("--key", default=None, help="Key as text (omit for a null key)")
    parser.add_argument("--value", default=None, help="Value as text (omit for a tombstone)")
    parser.add_argument("--key-schema", default=None, help="Avro schema file; --key is then JSON")
    parser.add_argument("--value-schema", default=None, help="Avro schema file; --value is then JSON")
    parser.add_argument("--header", action="append", default=[], metavar="NAME=VALUE")
    return parser.parse_args(argv)


def parse_headers(pairs) -> dict:
    headers = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"invalid header (expected NAME=VALUE): {pair}")
        headers[name] = value
    return headers


def build_payload(text: Optional[str], schema_path: Optional[str]) -> Any:
    """Plain text unless a schema file is given, then an AvroRecord from JSON text."""
    if text is None or schema_path is None:
        return text
    try:
        schema_str = Path(schema_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"cannot read Avro schema {schema_path}: {exc}") from exc
    try:
        fields = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Avro payload must be JSON: {exc}") from exc
    if not isinstance(fields, dict):
        raise SystemExit("Avro payload must be a JSON object")
    return AvroRecord(schema_str=schema_str, value=fields)


def log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise SystemExit(f"invalid LOG_LEVEL: {name!r} (expected DEBUG, INFO, WARNING, ERROR or CRITICAL)")
    return level


def main(argv=None, cfg: Optional[Config] = None) -> int:
    args = parse_args(argv)
    cfg = cfg or Config()
    logging.basicConfig(
        level=log_level(cfg.log_level),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    key = build_payload(args.key, args.key_schema)
    value = build_payload(args.value, args.value_schema)
    headers = parse_headers(args.header)

    publisher = build_kafka(cfg, JsonTopicConfigRepository(cfg.topic_config_dir))
    publisher.publish(args.topic, key, value, headers)
    remaining = publisher.flush(15)
    if remaining:
        logger.error("%d message(s) not delivered to %s", remaining, args.topic)
        return 1
    logger.info("record produced to %s", args.topic)
    return 0


if __name__ == "__main__":
    sys.exit(main())
