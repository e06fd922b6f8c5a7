"""
Command-line interface for merging JSON files into a Parquet file.

Usage:
    jsonmerge --input <path> --output <file.parquet> [options]
"""

import argparse
import json
import signal
import sys
import threading

from jsonmerge.batch.merger import JsonParquetMerger
from jsonmerge.core.config import DEFAULT_BATCH_SIZE, MergeConfigLoader, build_config
from jsonmerge.core.exceptions import MergeCancelled, MergeError
from jsonmerge.core.models import CompressionType
from jsonmerge.observability.logger import configure_logging, get_logger
from jsonmerge.observability.metrics import write_metrics_file


logger = get_logger(__name__)

_cancel_event = threading.Event()


def signal_handler(signum, frame):  # type: ignore[no-untyped-def]
    """
    Handle shutdown signals (SIGINT, SIGTERM) by cancelling the run.

    Args:
        signum: Signal number
        frame: Current stack frame
    """
    signal_name = signal.Signals(signum).name
    logger.info(f"Received {signal_name} signal, stopping after the current file...")
    _cancel_event.set()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonmerge",
        description="Merge multiple JSON files into a single Parquet file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Merge every JSON file under a directory
  jsonmerge --input data/ --output merged.parquet

  # Only files named data<N>.json, with validation and Snappy compression
  jsonmerge -i data/ -o merged.parquet -p 'data\\d+' --validate -c SNAPPY

  # Inspect the inferred schema without writing anything
  jsonmerge -i data/ -o merged.parquet --print-schema
        """
    )

    parser.add_argument("-i", "--input", help="Input directory or file path")
    parser.add_argument("-o", "--output", help="Output Parquet file path")
    parser.add_argument(
        "-p", "--pattern",
        help="Regular expression for filtering JSON files by name"
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        default=None,
        help="Skip files whose records do not match the inferred schema's fields"
    )
    parser.add_argument(
        "-b", "--batch-size",
        type=int,
        default=None,
        help=f"Number of records written per batch (default: {DEFAULT_BATCH_SIZE})"
    )
    parser.add_argument(
        "-c", "--compression",
        type=str.upper,
        choices=[c.value for c in CompressionType],
        default=None,
        help="Column compression codec (default: UNCOMPRESSED)"
    )
    parser.add_argument(
        "--config",
        help="YAML file with a 'merge' section; command-line flags override it"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: $LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Log output format (default: $LOG_FORMAT or json)"
    )
    parser.add_argument(
        "--metrics-file",
        help="Write Prometheus metrics to this file when the run ends"
    )
    parser.add_argument(
        "--print-schema",
        action="store_true",
        help="Print the inferred schema as JSON and exit without writing"
    )
    parser.add_argument(
        "--spark-schema",
        action="store_true",
        help="With --print-schema, print the Spark StructType JSON instead"
    )

    return parser


def load_config(args: argparse.Namespace):
    """Assemble the run configuration from a config file and CLI flags."""
    overrides = {
        "input_path": args.input,
        "output_path": args.output,
        "filter_pattern": args.pattern,
        "validate_schema": args.validate,
        "batch_size": args.batch_size,
        "compression": args.compression,
    }

    if args.config:
        return MergeConfigLoader(args.config).load(**overrides)
    return build_config(**overrides)


def print_schema(merger: JsonParquetMerger, spark: bool) -> None:
    files = merger.discover_files()
    if not files:
        logger.warning("No JSON files found matching criteria")
        return

    schema = merger.infer_schema(files)
    if spark:
        print(schema.to_spark_schema().json())
    else:
        print(json.dumps(schema.to_dict(), indent=2))


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, args.log_format)

    if args.batch_size is not None and args.batch_size < 1:
        logger.error("Batch size must be a positive number")
        return 1

    try:
        config = load_config(args)
    except MergeError as e:
        logger.error(str(e))
        return 1

    # Register signal handlers for graceful shutdown
    _cancel_event.clear()
    previous_handlers = {
        signum: signal.signal(signum, signal_handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }

    merger = JsonParquetMerger(config, cancel_event=_cancel_event)

    try:
        if args.print_schema:
            print_schema(merger, args.spark_schema)
            return 0

        result = merger.run()
    except MergeCancelled as e:
        logger.warning(str(e))
        return 130
    except (MergeError, OSError) as e:
        logger.error(f"Processing failed: {e}")
        return 1
    finally:
        for signum, handler in previous_handlers.items():
            if handler is not None:
                signal.signal(signum, handler)
        if args.metrics_file:
            write_metrics_file(args.metrics_file)

    if result.cancelled:
        logger.warning("Merge cancelled before all files were processed")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
