"""
jsonmerge: merge heterogeneous JSON files into a single Parquet file.
"""

__version__ = "0.1.3"
