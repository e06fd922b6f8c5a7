"""
Parquet sink backed by pyarrow.

Each flush becomes one row group in the output file.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

import pyarrow as pa
import pyarrow.parquet as pq

from jsonmerge.core.exceptions import SinkError
from jsonmerge.core.models import InferredSchema, SemanticType
from jsonmerge.observability.logger import get_logger

from .base import RecordSink


logger = get_logger(__name__)

# Errors pyarrow raises for values that do not fit a column
CONVERSION_ERRORS = (pa.ArrowException, TypeError, ValueError, OverflowError)


class ParquetSink(RecordSink):
    """
    Writes flat records to a single Parquet file.
    """

    def __init__(self):
        self.schema: InferredSchema | None = None
        self.destination: str | None = None
        self._arrow_schema: pa.Schema | None = None
        self._writer: pq.ParquetWriter | None = None
        self._int_columns: list[str] = []
        self._double_columns: list[str] = []
        self._timestamp_columns: list[str] = []
        self.rows_written = 0

    def open(self, schema: InferredSchema, destination: str | Path) -> None:
        """
        Open the output file.

        Args:
            schema: Column schema; fixed for the lifetime of the file
            destination: Output Parquet path

        Raises:
            SinkError: If the schema is empty or the destination cannot be written
        """
        if len(schema) == 0:
            raise SinkError("Cannot open a Parquet file with an empty schema")

        self.schema = schema
        self.destination = str(destination)
        self._arrow_schema = schema.to_arrow_schema()
        self._int_columns = [
            name for name, field in schema.columns.items()
            if field.semantic_type is SemanticType.INT64
        ]
        self._double_columns = [
            name for name, field in schema.columns.items()
            if field.semantic_type is SemanticType.DOUBLE
        ]
        self._timestamp_columns = [
            name for name, field in schema.columns.items()
            if field.semantic_type is SemanticType.TIMESTAMP
        ]

        try:
            self._writer = pq.ParquetWriter(
                self.destination,
                self._arrow_schema,
                compression=schema.compression_by_column(),
            )
        except (OSError, pa.ArrowException) as e:
            raise SinkError(f"Cannot open {self.destination} for writing: {e}") from e

        logger.debug(f"Opened Parquet file {self.destination} with {len(schema)} columns")

    def append_row(self, row: dict[str, Any]) -> None:
        self.append_rows([row])

    def append_rows(self, rows: Iterable[dict[str, Any]]) -> None:
        """
        Write a batch of rows as one row group.

        Raises:
            SinkError: If the sink is not open or a value does not fit its column
        """
        if self._writer is None:
            raise SinkError("Parquet sink is not open")

        rows = [self._coerce_row(row) for row in rows]
        if not rows:
            return

        try:
            table = pa.Table.from_pylist(rows, schema=self._arrow_schema)
        except CONVERSION_ERRORS as e:
            raise SinkError(f"Records do not match the output schema: {e}") from e

        try:
            self._writer.write_table(table)
        except (OSError, pa.ArrowException) as e:
            raise SinkError(f"Failed to write to {self.destination}: {e}") from e

        self.rows_written += len(rows)

    def close(self) -> None:
        """
        Finalize the Parquet footer.

        Raises:
            SinkError: If the file cannot be finalized
        """
        if self._writer is None:
            return

        writer, self._writer = self._writer, None
        try:
            writer.close()
        except (OSError, pa.ArrowException) as e:
            raise SinkError(f"Failed to close {self.destination}: {e}") from e

        logger.debug(f"Closed Parquet file {self.destination} ({self.rows_written} rows)")

    def _coerce_row(self, row: dict[str, Any]) -> dict[str, Any]:
        """
        Adapt values pyarrow would reject but that match the column kind.

        Raises:
            SinkError: If a boolean lands in a numeric column
        """
        coerced = None

        for name in self._int_columns + self._double_columns:
            if isinstance(row.get(name), bool):
                raise SinkError(
                    f"Records do not match the output schema: "
                    f"boolean value in numeric column '{name}'"
                )

        for name in self._int_columns:
            value = row.get(name)
            if isinstance(value, float) and value.is_integer():
                coerced = coerced or dict(row)
                coerced[name] = int(value)

        for name in self._timestamp_columns:
            value = row.get(name)
            if isinstance(value, date) and not isinstance(value, datetime):
                coerced = coerced or dict(row)
                coerced[name] = datetime(value.year, value.month, value.day)

        return coerced or row
