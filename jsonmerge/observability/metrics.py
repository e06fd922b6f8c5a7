"""
Prometheus metrics collection for jsonmerge

This module provides metrics instrumentation for monitoring merge
throughput, skipped input and run duration.
"""
from pathlib import Path

from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    write_to_textfile,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# WRITE METRICS
# =======================

# Rows appended to the sink
records_written_total = Counter(
    name="jsonmerge_records_written_total",
    documentation="Total number of records appended to the output file",
    registry=REGISTRY,
)

# Flush calls into the sink
batches_flushed_total = Counter(
    name="jsonmerge_batches_flushed_total",
    documentation="Total number of batches flushed to the output file",
    registry=REGISTRY,
)

# Batch size
batch_size_records = Histogram(
    name="jsonmerge_batch_size_records",
    documentation="Number of records in each flushed batch",
    buckets=[1, 10, 100, 500, 1000, 5000, 10000, 50000],
    registry=REGISTRY,
)

# =======================
# INPUT METRICS
# =======================

files_processed_total = Counter(
    name="jsonmerge_files_processed_total",
    documentation="Total number of input files whose records were written",
    registry=REGISTRY,
)

files_skipped_total = Counter(
    name="jsonmerge_files_skipped_total",
    documentation="Total number of input files skipped during the write phase",
    labelnames=["reason"],  # reason: parse_error, validation_failed
    registry=REGISTRY,
)

# =======================
# DURATION METRICS
# =======================

phase_duration_seconds = Histogram(
    name="jsonmerge_phase_duration_seconds",
    documentation="Time spent in each merge phase in seconds",
    labelnames=["phase"],  # phase: inference, write
    buckets=[0.01, 0.1, 0.5, 1.0, 5.0, 30.0, 120.0, 600.0],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def write_metrics_file(path: str | Path) -> None:
    """
    Write the current metrics to a node-exporter style text file

    Args:
        path: Destination file
    """
    write_to_textfile(str(path), REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(phase_duration_seconds, phase="inference"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        """
        Initialize duration tracker

        Args:
            histogram: Prometheus Histogram metric
            **labels: Label values for the metric
        """
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False
