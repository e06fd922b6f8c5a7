"""
Unit tests for record transformation.

Includes property-based testing with hypothesis.
"""

import json
from datetime import date, datetime

from hypothesis import given
from hypothesis import strategies as st

from jsonmerge.core.transform import transform_record


primitives = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**63), max_value=2**63 - 1),
    st.floats(allow_nan=False),
    st.text(),
)


class TestTransformRecord:
    """Tests for transform_record"""

    def test_nested_object_serialized_compactly(self):
        result = transform_record({"a": {"x": 1}})
        assert result["a"] == '{"x":1}'

    def test_nested_list_serialized_compactly(self):
        result = transform_record({"tags": ["a", "b"], "matrix": [[1, 2], [3]]})

        assert result["tags"] == '["a","b"]'
        assert result["matrix"] == "[[1,2],[3]]"

    def test_empty_structures_serialized(self):
        assert transform_record({"o": {}, "l": []}) == {"o": "{}", "l": "[]"}

    def test_serialization_matches_json_dumps(self):
        value = {"user": {"name": "Zoë", "roles": ["admin", None]}, "n": 1.5}
        result = transform_record({"meta": value})

        assert result["meta"] == json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        assert json.loads(result["meta"]) == value

    def test_null_preserved(self):
        assert transform_record({"a": None}) == {"a": None}

    def test_datetime_passed_through(self):
        moment = datetime(2024, 1, 2, 3, 4, 5)
        day = date(2024, 1, 2)
        result = transform_record({"at": moment, "on": day})

        assert result["at"] is moment
        assert result["on"] is day

    def test_primitives_passed_through(self):
        record = {"s": "text", "i": 42, "f": 1.5, "b": False}
        assert transform_record(record) == record

    def test_field_order_preserved(self):
        record = {"z": 1, "a": {"k": 2}, "m": None}
        assert list(transform_record(record)) == ["z", "a", "m"]

    def test_input_not_modified(self):
        record = {"a": {"x": 1}}
        transform_record(record)
        assert record == {"a": {"x": 1}}

    @given(st.dictionaries(st.text(), primitives))
    def test_property_idempotent_on_primitives(self, record):
        """Property test: transforming twice equals transforming once"""
        once = transform_record(record)
        assert transform_record(once) == once

    @given(st.dictionaries(st.text(), st.dictionaries(st.text(), st.integers())))
    def test_property_nested_output_is_flat(self, record):
        """Property test: no nested structure survives the transform"""
        result = transform_record(record)
        assert all(isinstance(value, str) for value in result.values())
