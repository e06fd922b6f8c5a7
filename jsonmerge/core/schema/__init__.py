"""
Schema inference.
"""

from .inference import SchemaInferrer, classify_value

__all__ = [
    "SchemaInferrer",
    "classify_value",
]
