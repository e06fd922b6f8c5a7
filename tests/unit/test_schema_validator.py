"""
Unit tests for field-set validation against the inferred schema.
"""

from unittest.mock import patch

import pytest

from jsonmerge.core.models import InferredSchema, SemanticType
from jsonmerge.core.validators import SchemaValidator
from jsonmerge.core.validators import schema_validator


@pytest.fixture
def schema() -> InferredSchema:
    return InferredSchema.from_types({
        "id": SemanticType.INT64,
        "name": SemanticType.TEXT,
    })


class TestSchemaValidator:
    """Tests for SchemaValidator"""

    def test_disabled_always_passes(self, schema):
        validator = SchemaValidator(schema, enabled=False)

        with patch.object(schema_validator.logger, "warning") as warn:
            assert validator.validate([{"other": 1}]) is True

        warn.assert_not_called()

    def test_missing_field_fails(self, schema):
        validator = SchemaValidator(schema)

        with patch.object(schema_validator.logger, "warning") as warn:
            assert validator.validate([{"id": 1}]) is False

        assert "Missing fields" in warn.call_args[0][0]
        assert "name" in warn.call_args[0][0]

    def test_extra_field_fails(self, schema):
        validator = SchemaValidator(schema)

        with patch.object(schema_validator.logger, "warning") as warn:
            assert validator.validate([{"id": 1, "name": "x", "extra": "y"}]) is False

        assert "Extra fields" in warn.call_args[0][0]
        assert "extra" in warn.call_args[0][0]

    def test_exact_match_passes(self, schema):
        validator = SchemaValidator(schema)
        assert validator.validate([{"id": 1, "name": "x"}, {"name": "y", "id": 2}]) is True

    def test_null_values_still_count_as_present(self, schema):
        validator = SchemaValidator(schema)
        assert validator.validate([{"id": None, "name": None}]) is True

    def test_types_are_not_checked(self, schema):
        validator = SchemaValidator(schema)
        assert validator.validate([{"id": "not-a-number", "name": 5}]) is True

    def test_every_offending_record_reported(self, schema):
        validator = SchemaValidator(schema)
        records = [
            {"id": 1},
            {"id": 2, "name": "ok"},
            {"id": 3, "name": "x", "extra": True},
            {"extra": 1},
        ]

        with patch.object(schema_validator.logger, "warning") as warn:
            assert validator.validate(records) is False

        # record 0 missing, record 2 extra, record 3 missing + extra
        assert warn.call_count == 4

    def test_empty_batch_passes(self, schema):
        assert SchemaValidator(schema).validate([]) is True

    def test_check_record_details(self, schema):
        result = SchemaValidator(schema).check_record({"name": "x", "age": 3}, record_index=7)

        assert result.record_index == 7
        assert result.passed is False
        assert result.missing_fields == ["id"]
        assert result.extra_fields == ["age"]
