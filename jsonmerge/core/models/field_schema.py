"""
FieldSchema model describing a single output column.
"""

from enum import Enum

from pydantic import BaseModel


class SemanticType(str, Enum):
    """The five column kinds an inferred schema can hold."""

    TEXT = "TEXT"
    INT64 = "INT64"
    DOUBLE = "DOUBLE"
    BOOLEAN = "BOOLEAN"
    TIMESTAMP = "TIMESTAMP"


class CompressionType(str, Enum):
    """Column compression codecs accepted by the Parquet sink."""

    UNCOMPRESSED = "UNCOMPRESSED"
    GZIP = "GZIP"
    SNAPPY = "SNAPPY"
    BROTLI = "BROTLI"

    @property
    def codec(self) -> str:
        """Codec name as understood by pyarrow."""
        if self is CompressionType.UNCOMPRESSED:
            return "none"
        return self.value.lower()


# Physical type names used when the schema is rendered Parquet-style
PARQUET_TYPE_NAMES = {
    SemanticType.TEXT: "UTF8",
    SemanticType.INT64: "INT64",
    SemanticType.DOUBLE: "DOUBLE",
    SemanticType.BOOLEAN: "BOOLEAN",
    SemanticType.TIMESTAMP: "TIMESTAMP_MILLIS",
}


class FieldSchema(BaseModel):
    """
    One column of the inferred schema.

    Attributes:
        name: Field name as it appears in the input records
        semantic_type: Column kind decided by inference
        optional: Whether the column is nullable (always True for inferred columns)
        compression: Compression codec applied to the column
    """

    name: str
    semantic_type: SemanticType
    optional: bool = True
    compression: CompressionType = CompressionType.UNCOMPRESSED

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "score",
                "semantic_type": "DOUBLE",
                "optional": True,
                "compression": "SNAPPY"
            }
        }

    def to_dict(self) -> dict[str, object]:
        """Render as a Parquet-style column definition."""
        return {
            "type": PARQUET_TYPE_NAMES[self.semantic_type],
            "optional": self.optional,
            "compression": self.compression.value,
        }
