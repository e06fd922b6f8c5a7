"""
Core data models for the JSON to Parquet merger.

All models use Pydantic for runtime validation and type safety.
"""

from .field_schema import CompressionType, FieldSchema, SemanticType
from .inferred_schema import InferredSchema
from .merge_result import MergeResult, SkippedFile
from .validation_result import ValidationResult

__all__ = [
    "CompressionType",
    "FieldSchema",
    "SemanticType",
    "InferredSchema",
    "MergeResult",
    "SkippedFile",
    "ValidationResult",
]
