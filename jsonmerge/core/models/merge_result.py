"""
MergeResult model summarizing a completed (or aborted) write phase.
"""

from typing import List

from pydantic import BaseModel, Field


class SkippedFile(BaseModel):
    """A file dropped from the write phase and the reason why."""

    path: str
    reason: str


class MergeResult(BaseModel):
    """
    Outcome of a merge run.

    Attributes:
        records_written: Rows appended to the sink
        batches_flushed: Number of flush calls made into the sink
        files_processed: Files whose records were admitted
        skipped_files: Files dropped because of parse or validation failures
        cancelled: Whether the run stopped early on a cancellation request
    """

    records_written: int = Field(0, ge=0)
    batches_flushed: int = Field(0, ge=0)
    files_processed: int = Field(0, ge=0)
    skipped_files: List[SkippedFile] = Field(default_factory=list)
    cancelled: bool = False

    @property
    def files_skipped(self) -> int:
        return len(self.skipped_files)

    class Config:
        json_schema_extra = {
            "example": {
                "records_written": 3,
                "batches_flushed": 2,
                "files_processed": 2,
                "skipped_files": [
                    {"path": "/data/broken.json", "reason": "invalid JSON"}
                ],
                "cancelled": False
            }
        }
