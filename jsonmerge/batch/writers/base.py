"""
Sink interface for flat records.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

from jsonmerge.core.models import InferredSchema


class RecordSink(ABC):
    """
    Destination that persists flat records under a fixed schema.

    The schema is fixed when the sink is opened. Implementations raise
    SinkError for any failure to open, write or close.
    """

    @abstractmethod
    def open(self, schema: InferredSchema, destination: str | Path) -> None:
        """Open the sink for writing rows of the given schema."""

    @abstractmethod
    def append_row(self, row: dict[str, Any]) -> None:
        """Append a single flat record."""

    def append_rows(self, rows: Iterable[dict[str, Any]]) -> None:
        """
        Append a batch of flat records, in order.

        Subclasses may override this to write the batch in one call.
        """
        for row in rows:
            self.append_row(row)

    @abstractmethod
    def close(self) -> None:
        """Finalize the output. Closing an unopened sink is a no-op."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
