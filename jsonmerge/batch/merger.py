"""
End-to-end merge run: discover → infer → write.
"""

import threading
from pathlib import Path

from jsonmerge.batch.pipeline import BatchPipeline
from jsonmerge.batch.readers import FileDiscovery, JsonFileReader
from jsonmerge.batch.writers import ParquetSink, RecordSink
from jsonmerge.core.config import MergeConfig
from jsonmerge.core.exceptions import ConfigError, MergeCancelled, MergeError
from jsonmerge.core.models import InferredSchema, MergeResult
from jsonmerge.core.schema import SchemaInferrer
from jsonmerge.observability import metrics
from jsonmerge.observability.logger import get_logger, log_operation


logger = get_logger(__name__)


class JsonParquetMerger:
    """
    Merges a set of JSON files into one Parquet file.

    Inference reads every file once to fix the schema before the sink is
    opened; the pipeline then reads every file again to write it.
    """

    def __init__(
        self,
        config: MergeConfig,
        sink: RecordSink | None = None,
        discovery: FileDiscovery | None = None,
        reader: JsonFileReader | None = None,
        cancel_event: threading.Event | None = None
    ):
        """
        Initialize merger.

        Args:
            config: Run configuration
            sink: Output sink (Parquet by default)
            discovery: Input file discovery
            reader: JSON reader shared by inference and the pipeline
            cancel_event: Cooperative cancellation signal for inference and the write phase
        """
        self.config = config
        self.discovery = discovery or FileDiscovery()
        self.reader = reader or JsonFileReader()
        self.sink = sink if sink is not None else ParquetSink()
        self.cancel_event = cancel_event
        self.inferrer = SchemaInferrer(
            self.reader,
            compression=config.compression,
            cancel_event=cancel_event,
        )
        self.inferred_schema: InferredSchema | None = None

    def discover_files(self) -> list[str]:
        """
        Resolve the input files for this run.

        An explicit file list in the configuration takes precedence over
        discovery from the input path.
        """
        if self.config.input_files is not None:
            return list(self.config.input_files)
        return self.discovery.discover(self.config.input_path, self.config.filter_pattern)

    def infer_schema(self, files: list[str]) -> InferredSchema:
        with metrics.track_duration(metrics.phase_duration_seconds, phase="inference"):
            self.inferred_schema = self.inferrer.infer(files)
        return self.inferred_schema

    def run(self) -> MergeResult:
        """
        Execute the merge.

        Returns:
            MergeResult for the write phase (empty if no files were found or
            the run was cancelled before writing started)

        Raises:
            MergeError: On any fatal failure (discovery, schema, sink, config)
            OSError: If an input file cannot be read during the write phase
        """
        try:
            logger.info("Starting JSON to Parquet merge")

            self._check_output_directory()

            files = self.discover_files()
            logger.info(f"Found {len(files)} JSON files to process")

            if not files:
                logger.warning("No JSON files found matching criteria")
                return MergeResult()

            try:
                schema = self.infer_schema(files)
            except MergeCancelled:
                logger.warning("Merge cancelled during schema inference, no output written")
                return MergeResult(cancelled=True)

            logger.info("Schema inferred successfully", extra={"schema": schema.to_dict()})

            pipeline = BatchPipeline(
                sink=self.sink,
                reader=self.reader,
                batch_size=self.config.batch_size,
                validate_schema=self.config.validate_schema,
                cancel_event=self.cancel_event,
            )

            with log_operation("Writing Parquet file", logger=logger, output=self.config.output_path):
                with metrics.track_duration(metrics.phase_duration_seconds, phase="write"):
                    result = pipeline.process(files, schema, self.config.output_path)

            logger.info(
                f"Successfully merged {result.records_written} records into {self.config.output_path}",
                extra={
                    "records_written": result.records_written,
                    "batches_flushed": result.batches_flushed,
                    "files_processed": result.files_processed,
                    "files_skipped": result.files_skipped,
                }
            )
            return result

        except (MergeError, OSError) as e:
            logger.error(f"Error: {e}")
            raise

    def _check_output_directory(self) -> None:
        output_dir = Path(self.config.output_path).resolve().parent
        if not output_dir.is_dir():
            raise ConfigError(f"Output directory does not exist: {output_dir}")
