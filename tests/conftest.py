"""
Pytest configuration and fixtures for jsonmerge tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from jsonmerge.batch.writers import RecordSink
from jsonmerge.core.exceptions import FileSkipError


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the filesystem beyond tmp_path"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that write real Parquet files"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that run the command-line interface"
    )


# =======================
# TEST DOUBLES
# =======================

class StubReader:
    """
    In-memory stand-in for JsonFileReader.

    Maps a path to its records, or to an exception raised on read.
    """

    def __init__(self, files: dict[str, Any]):
        self.files = files
        self.reads: list[str] = []

    def read_records(self, file_path: str) -> list[dict[str, Any]]:
        self.reads.append(file_path)
        content = self.files[file_path]
        if isinstance(content, Exception):
            raise content
        return content


def parse_error(path: str) -> FileSkipError:
    return FileSkipError(path, "invalid JSON: Expecting value: line 1 column 1 (char 0)")


class RecordingSink(RecordSink):
    """
    Sink that keeps every call in memory.

    Optionally fails on the Nth append_rows call or on close.
    """

    def __init__(self, fail_on_flush: int | None = None, fail_on_close: bool = False):
        self.fail_on_flush = fail_on_flush
        self.fail_on_close = fail_on_close
        self.schema = None
        self.destination = None
        self.flushes: list[list[dict[str, Any]]] = []
        self.opened = False
        self.closed = False

    @property
    def rows(self) -> list[dict[str, Any]]:
        return [row for batch in self.flushes for row in batch]

    def open(self, schema, destination):
        self.schema = schema
        self.destination = destination
        self.opened = True

    def append_row(self, row):
        self.append_rows([row])

    def append_rows(self, rows):
        if self.fail_on_flush is not None and len(self.flushes) + 1 == self.fail_on_flush:
            raise RuntimeError("disk full")
        self.flushes.append(list(rows))

    def close(self):
        self.closed = True
        if self.fail_on_close:
            raise RuntimeError("close failed")


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def write_json(tmp_path) -> Callable[..., str]:
    """
    Factory writing JSON content under tmp_path

    Returns:
        Callable(name, data) -> absolute file path as str
    """
    def _write(name: str, data: Any, raw: bool = False) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if raw else json.dumps(data), encoding="utf-8")
        return str(path.resolve())

    return _write


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def output_path(tmp_path) -> Path:
    return tmp_path / "out" / "merged.parquet"
