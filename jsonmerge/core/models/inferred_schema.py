"""
InferredSchema model: the single column schema shared by a merge run.
"""

from typing import Any

import pyarrow as pa
from pydantic import BaseModel, Field

from .field_schema import CompressionType, FieldSchema, SemanticType


ARROW_TYPES = {
    SemanticType.TEXT: pa.string(),
    SemanticType.INT64: pa.int64(),
    SemanticType.DOUBLE: pa.float64(),
    SemanticType.BOOLEAN: pa.bool_(),
    SemanticType.TIMESTAMP: pa.timestamp("ms"),
}


class InferredSchema(BaseModel):
    """
    Insertion-ordered mapping from field name to column definition.

    Built once per run by the schema inferrer and shared read-only by the
    validator and the sink. Field order is first-discovery order across the
    input files.

    Attributes:
        columns: Column definitions keyed by field name
    """

    columns: dict[str, FieldSchema] = Field(default_factory=dict)

    class Config:
        frozen = True

    @classmethod
    def from_types(
        cls,
        types: dict[str, SemanticType],
        compression: CompressionType = CompressionType.UNCOMPRESSED
    ) -> "InferredSchema":
        """
        Build a schema where every column is optional and shares one codec.

        Args:
            types: Semantic type per field name, in column order
            compression: Codec applied to every column

        Returns:
            InferredSchema instance
        """
        return cls(columns={
            name: FieldSchema(
                name=name,
                semantic_type=semantic_type,
                optional=True,
                compression=compression
            )
            for name, semantic_type in types.items()
        })

    @property
    def field_names(self) -> list[str]:
        return list(self.columns)

    def __contains__(self, name: object) -> bool:
        return name in self.columns

    def __len__(self) -> int:
        return len(self.columns)

    def __getitem__(self, name: str) -> FieldSchema:
        return self.columns[name]

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """
        Render as a Parquet-style schema definition.

        Returns:
            Mapping of field name to {type, optional, compression}
        """
        return {name: field.to_dict() for name, field in self.columns.items()}

    def compression_by_column(self) -> dict[str, str]:
        """Per-column codec directives in pyarrow's naming."""
        return {name: field.compression.codec for name, field in self.columns.items()}

    def to_arrow_schema(self) -> pa.Schema:
        """
        Convert to an Arrow schema for the Parquet writer.

        Returns:
            pyarrow Schema with every column nullable
        """
        return pa.schema([
            pa.field(name, ARROW_TYPES[field.semantic_type], nullable=field.optional)
            for name, field in self.columns.items()
        ])

    def to_spark_schema(self):
        """
        Convert to a Spark StructType so the merged file can be read back
        with an explicit schema.

        Returns:
            pyspark.sql.types.StructType
        """
        # Lazy import: only needed when a Spark schema is requested
        from pyspark.sql.types import (
            BooleanType,
            DoubleType,
            LongType,
            StringType,
            StructField,
            StructType,
            TimestampType,
        )

        type_mapping = {
            SemanticType.TEXT: StringType(),
            SemanticType.INT64: LongType(),
            SemanticType.DOUBLE: DoubleType(),
            SemanticType.BOOLEAN: BooleanType(),
            SemanticType.TIMESTAMP: TimestampType(),
        }

        return StructType([
            StructField(name, type_mapping[field.semantic_type], field.optional)
            for name, field in self.columns.items()
        ])
