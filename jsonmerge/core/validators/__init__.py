"""
Record validation against the inferred schema.
"""

from .schema_validator import SchemaValidator

__all__ = [
    "SchemaValidator",
]
