"""
Error taxonomy for the merge run.

File-scoped errors (FileSkipError) are absorbed by the batch pipeline and
turned into skip decisions. Everything else propagates to the caller.
"""


class MergeError(Exception):
    """Base class for all merge failures."""


class ConfigError(MergeError):
    """Raised when the run configuration is invalid."""


class DiscoveryError(MergeError):
    """Raised when no input can be located."""


class SchemaError(MergeError):
    """Raised when a schema cannot be inferred from the input files."""


class SinkError(MergeError):
    """Raised when opening, writing to, or closing the output sink fails."""


class FileSkipError(MergeError):
    """Raised when a single input file must be dropped from the write phase."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MergeCancelled(MergeError):
    """Raised when a cancellation request stops schema inference."""
