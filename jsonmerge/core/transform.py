"""
Record flattening before rows reach the Parquet sink.
"""

import json
from datetime import date, datetime
from typing import Any


def serialize_nested(value: dict | list) -> str:
    """Compact JSON text for a nested object or list."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def transform_value(value: Any) -> Any:
    """
    Flatten a single field value.

    None stays None, date/time values pass through for the sink to encode,
    objects and lists become compact JSON text, other primitives are kept.
    """
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, (dict, list)):
        return serialize_nested(value)
    return value


def transform_record(record: dict[str, Any]) -> dict[str, Any]:
    """
    Produce a flat record safe to hand to the sink.

    Works on the record's own values and never consults the schema.
    The input record is not modified.

    Args:
        record: Raw record as parsed from JSON

    Returns:
        New record with nested structures serialized to text
    """
    return {key: transform_value(value) for key, value in record.items()}
