"""
Output sinks.
"""

from .base import RecordSink
from .parquet_sink import ParquetSink

__all__ = [
    "RecordSink",
    "ParquetSink",
]
