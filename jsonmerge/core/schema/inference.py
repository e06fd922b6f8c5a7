"""
Schema inference across a set of JSON files.

Infers one column schema from every input file with a double pass:
the first pass collects field names, the second walks the input once
more and types each field from its first non-null value anywhere in it.
"""

import threading
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from jsonmerge.batch.readers.json_reader import JsonFileReader
from jsonmerge.core.exceptions import FileSkipError, MergeCancelled, SchemaError
from jsonmerge.core.models import CompressionType, InferredSchema, SemanticType
from jsonmerge.observability.logger import get_logger


logger = get_logger(__name__)


def classify_value(value: Any) -> SemanticType | None:
    """
    Classify a single JSON value.

    Integrality is decided per value, so ``3.0`` is INT64. Objects and
    lists are TEXT because they are serialized at transform time.

    Args:
        value: Any value found in a record

    Returns:
        SemanticType, or None for null values
    """
    if value is None:
        return None
    # bool must be checked before int: bool is a subclass of int
    if isinstance(value, bool):
        return SemanticType.BOOLEAN
    if isinstance(value, int):
        return SemanticType.INT64
    if isinstance(value, float):
        return SemanticType.INT64 if value.is_integer() else SemanticType.DOUBLE
    if isinstance(value, (datetime, date)):
        return SemanticType.TIMESTAMP
    return SemanticType.TEXT


class SchemaInferrer:
    """
    Infers a unified schema from an ordered list of JSON files.

    Files are read once per pass and never cached, so peak memory stays
    bounded by the largest single file.
    """

    def __init__(
        self,
        reader: JsonFileReader | None = None,
        compression: CompressionType = CompressionType.UNCOMPRESSED,
        cancel_event: threading.Event | None = None
    ):
        """
        Initialize schema inferrer.

        Args:
            reader: Reader used to load files
            compression: Codec tagged on every inferred column
            cancel_event: Checked before each file read in both passes
        """
        self.reader = reader or JsonFileReader()
        self.compression = compression
        self.cancel_event = cancel_event

    def infer(self, files: Sequence[str]) -> InferredSchema:
        """
        Infer the schema for a set of files.

        Args:
            files: Input files, in processing order

        Returns:
            InferredSchema with every observed field

        Raises:
            SchemaError: If a file cannot be parsed or no fields are found
            MergeCancelled: If cancellation is requested before a file is read
        """
        try:
            all_fields = self._collect_field_names(files)

            if not all_fields:
                raise SchemaError("No fields found in any of the input files")

            types = self._infer_field_types(all_fields, files)
        except SchemaError:
            logger.error(f"Schema inference failed for files: {', '.join(map(str, files))}")
            raise

        schema = InferredSchema.from_types(types, self.compression)
        logger.info(
            f"Inferred schema with {len(schema)} fields",
            extra={"fields": {name: t.value for name, t in types.items()}}
        )
        return schema

    def _collect_field_names(self, files: Iterable[str]) -> list[str]:
        """
        First pass: union of field names in first-discovery order.

        Raises:
            SchemaError: If any file fails to parse
        """
        # dict keeps insertion order, used as an ordered set
        seen: dict[str, None] = {}

        for file_path in files:
            self._check_cancelled(file_path)
            try:
                records = self.reader.read_records(file_path)
            except FileSkipError as e:
                raise SchemaError(f"Failed to parse JSON from {file_path}: {e.reason}") from e

            if not records:
                logger.debug(f"Skipping empty file during inference: {file_path}")
                continue

            for record in records:
                for key in record:
                    seen.setdefault(key, None)

        return list(seen)

    def _infer_field_types(
        self,
        field_names: list[str],
        files: Iterable[str]
    ) -> dict[str, SemanticType]:
        """
        Second pass: type of each field's first non-null value across all files.

        Every pending field is resolved from the same walk over the input,
        which stops as soon as no field is left pending. Fields that are null
        or absent everywhere fall back to TEXT.
        """
        resolved: dict[str, SemanticType] = {}
        pending = list(field_names)

        for file_path in files:
            if not pending:
                break

            self._check_cancelled(file_path)
            try:
                records = self.reader.read_records(file_path)
            except FileSkipError:
                continue

            for record in records:
                for name in [n for n in pending if record.get(n) is not None]:
                    resolved[name] = classify_value(record[name])
                    pending.remove(name)
                if not pending:
                    break

        for name in pending:
            logger.debug(f"Field '{name}' has no non-null values, defaulting to TEXT")

        return {name: resolved.get(name, SemanticType.TEXT) for name in field_names}

    def _check_cancelled(self, file_path: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.warning(f"Cancellation requested, stopping schema inference before {file_path}")
            raise MergeCancelled("Schema inference cancelled")
