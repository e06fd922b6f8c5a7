"""
Batch write pipeline orchestration.

Coordinates the flow per file: read → validate → transform → accumulate → flush
"""

import threading
from pathlib import Path
from typing import Any, Sequence

from jsonmerge.batch.readers import JsonFileReader
from jsonmerge.batch.writers import ParquetSink, RecordSink
from jsonmerge.core.config import DEFAULT_BATCH_SIZE
from jsonmerge.core.exceptions import ConfigError, FileSkipError, SinkError
from jsonmerge.core.models import InferredSchema, MergeResult, SkippedFile
from jsonmerge.core.transform import transform_record
from jsonmerge.core.validators import SchemaValidator
from jsonmerge.observability import metrics
from jsonmerge.observability.logger import get_logger


logger = get_logger(__name__)


class BatchPipeline:
    """
    Streams records from every input file into a sink in bounded batches.

    Flow per file:
    1. Read and parse the file (parse failure skips the file)
    2. Validate field names against the schema, if enabled (failure skips the file)
    3. Transform each record to a flat record
    4. Accumulate into the current batch, flushing when it is full

    The remainder is flushed after the last file and the sink is always
    closed, even when a fatal error aborts the run.
    """

    def __init__(
        self,
        sink: RecordSink | None = None,
        reader: JsonFileReader | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        validate_schema: bool = False,
        cancel_event: threading.Event | None = None
    ):
        """
        Initialize batch pipeline.

        Args:
            sink: Destination for flat records (Parquet by default)
            reader: Reader used to load input files
            batch_size: Maximum number of records held before a flush
            validate_schema: Skip files whose records do not match the schema's fields
            cancel_event: When set, stop reading further files and close the sink

        Raises:
            ConfigError: If batch_size is not positive
        """
        if batch_size < 1:
            raise ConfigError(f"Batch size must be a positive number, got {batch_size}")

        self.sink = sink if sink is not None else ParquetSink()
        self.reader = reader or JsonFileReader()
        self.batch_size = batch_size
        self.validate_schema = validate_schema
        self.cancel_event = cancel_event

    def process(
        self,
        files: Sequence[str],
        schema: InferredSchema,
        output_path: str | Path
    ) -> MergeResult:
        """
        Write every input file's records to the sink.

        Args:
            files: Input files, in processing order
            schema: Inferred schema the sink is opened with
            output_path: Destination handed to the sink

        Returns:
            MergeResult with the number of records written

        Raises:
            SinkError: If the sink cannot be opened, written or closed
            OSError: If an input file cannot be read
        """
        result = MergeResult()
        validator = SchemaValidator(schema, enabled=self.validate_schema)
        batch: list[dict[str, Any]] = []
        current_file = ""

        self.sink.open(schema, output_path)

        try:
            for idx, file_path in enumerate(files, start=1):
                if self._cancelled():
                    logger.warning(
                        f"Cancellation requested, stopping before file {idx}/{len(files)}; "
                        f"discarding {len(batch)} unflushed records"
                    )
                    result.cancelled = True
                    batch = []
                    break

                current_file = file_path
                logger.info(f"Processing file {idx}/{len(files)}: {file_path}")

                try:
                    records = self.reader.read_records(file_path)
                except FileSkipError as e:
                    logger.error(f"Failed to parse {file_path}, skipping file: {e.reason}")
                    self._skip(result, file_path, e.reason, "parse_error")
                    continue

                if not validator.validate(records):
                    logger.error(f"Schema validation failed for {file_path}, skipping file")
                    self._skip(result, file_path, "schema validation failed", "validation_failed")
                    continue

                for record in records:
                    batch.append(transform_record(record))

                    if len(batch) >= self.batch_size:
                        self._write_batch(batch, result)
                        batch = []

                result.files_processed += 1
                metrics.increment_counter(metrics.files_processed_total)

                progress = idx / len(files) * 100
                logger.info(
                    f"Progress: {progress:.1f}% ({result.records_written} records written)"
                )

            if batch:
                self._write_batch(batch, result)
        except BaseException:
            logger.error(f"Error processing file: {current_file}")
            self._close_quietly()
            raise
        else:
            self._close()

        return result

    def _write_batch(self, batch: list[dict[str, Any]], result: MergeResult) -> None:
        """
        Flush one batch to the sink.

        This is the only place the written-records count changes.
        """
        try:
            self.sink.append_rows(batch)
        except SinkError:
            raise
        except Exception as e:
            raise SinkError(f"Failed to write batch of {len(batch)} records: {e}") from e

        result.records_written += len(batch)
        result.batches_flushed += 1

        metrics.increment_counter(metrics.records_written_total, len(batch))
        metrics.increment_counter(metrics.batches_flushed_total)
        metrics.observe_histogram(metrics.batch_size_records, len(batch))

        logger.info(f"Wrote batch of {len(batch)} records")

    def _skip(self, result: MergeResult, file_path: str, reason: str, label: str) -> None:
        result.skipped_files.append(SkippedFile(path=str(file_path), reason=reason))
        metrics.increment_counter(metrics.files_skipped_total, reason=label)

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _close(self) -> None:
        try:
            self.sink.close()
        except SinkError:
            raise
        except Exception as e:
            raise SinkError(f"Failed to close sink: {e}") from e

    def _close_quietly(self) -> None:
        """Close the sink after a failure without masking the original error."""
        try:
            self.sink.close()
        except Exception as e:
            logger.error(f"Failed to close sink after error: {e}")
