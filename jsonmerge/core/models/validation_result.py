"""
ValidationResult model representing the outcome of checking one record's
field set against the inferred schema (ephemeral).
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of comparing a record's field names with the schema.

    Attributes:
        record_index: Position of the record within its file
        passed: True when the field sets match exactly
        missing_fields: Schema fields absent from the record
        extra_fields: Record fields absent from the schema
    """

    record_index: int = Field(..., ge=0)
    passed: bool
    missing_fields: List[str] = Field(default_factory=list)
    extra_fields: List[str] = Field(default_factory=list)

    @field_validator('extra_fields')
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies no mismatched fields."""
        if info.data.get('passed') and (v or info.data.get('missing_fields')):
            raise ValueError("passed=True but mismatched fields are listed")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "record_index": 4,
                "passed": False,
                "missing_fields": ["name"],
                "extra_fields": ["nickname"]
            }
        }
