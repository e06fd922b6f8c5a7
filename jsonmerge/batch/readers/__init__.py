"""
Input discovery and JSON readers.
"""

from .discovery import FileDiscovery
from .json_reader import JsonFileReader

__all__ = [
    "FileDiscovery",
    "JsonFileReader",
]
