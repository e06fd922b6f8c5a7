"""
Batch merge: readers, sinks and the write pipeline.
"""

from .pipeline import BatchPipeline
from .readers import FileDiscovery, JsonFileReader
from .writers import ParquetSink, RecordSink

__all__ = [
    "BatchPipeline",
    "FileDiscovery",
    "JsonFileReader",
    "ParquetSink",
    "RecordSink",
]
