"""
SchemaValidator - checks that every record carries exactly the schema's fields.
"""

from typing import Any, Iterable

from jsonmerge.core.models import InferredSchema, ValidationResult
from jsonmerge.observability.logger import get_logger


logger = get_logger(__name__)


class SchemaValidator:
    """
    Compares raw records against the inferred schema by field name.

    Types are not checked. A batch passes only when no record has missing
    or extra fields. When disabled, every batch passes without comparison.
    """

    def __init__(self, schema: InferredSchema, enabled: bool = True):
        """
        Initialize validator.

        Args:
            schema: Inferred schema to compare against
            enabled: Whether validation is performed at all
        """
        self.schema = schema
        self.enabled = enabled
        self.schema_fields = schema.field_names

    def check_record(self, record: dict[str, Any], record_index: int = 0) -> ValidationResult:
        """
        Compare a single record with the schema.

        Args:
            record: Raw (untransformed) record
            record_index: Position of the record, for reporting

        Returns:
            ValidationResult listing missing and extra fields
        """
        missing = [name for name in self.schema_fields if name not in record]
        extra = [name for name in record if name not in self.schema]

        return ValidationResult(
            record_index=record_index,
            passed=not missing and not extra,
            missing_fields=missing,
            extra_fields=extra,
        )

    def validate(self, records: Iterable[dict[str, Any]]) -> bool:
        """
        Validate a batch of raw records.

        Every offending record is reported, not just the first.

        Args:
            records: Raw records from one file

        Returns:
            True if every record matches the schema's field set
        """
        if not self.enabled:
            return True

        is_valid = True

        for idx, record in enumerate(records):
            result = self.check_record(record, idx)

            if result.missing_fields:
                is_valid = False
                logger.warning(
                    f"Missing fields in record {idx}: {', '.join(result.missing_fields)}",
                    extra={"record_index": idx, "missing_fields": result.missing_fields}
                )

            if result.extra_fields:
                is_valid = False
                logger.warning(
                    f"Extra fields in record {idx}: {', '.join(result.extra_fields)}",
                    extra={"record_index": idx, "extra_fields": result.extra_fields}
                )

        return is_valid
