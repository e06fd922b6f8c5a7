"""
End-to-end tests for the jsonmerge command line.

Tests the complete flow: JSON files → inference → batched Parquet output
"""

import json
import signal

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

import jsonmerge.batch.merger as merger_module
from jsonmerge.batch.readers import JsonFileReader
from jsonmerge.cli import merge_cli
from jsonmerge.cli.merge_cli import main


@pytest.fixture
def scores_dir(tmp_path, write_json):
    write_json("input/file1.json", [
        {"id": 1, "score": None, "name": "John"},
        {"id": 2, "score": None, "name": "Jane"},
    ])
    write_json("input/file2.json", [
        {"id": 3, "score": 85.5, "name": "Bob"},
    ])
    return tmp_path / "input"


@pytest.mark.e2e
def test_null_first_file_end_to_end(scores_dir, tmp_path):
    """
    Two files where the first holds only nulls for `score`.

    Steps:
    1. Merge with batch size 2
    2. Verify the schema types score from the second file
    3. Verify all rows arrive in file-then-record order
    """
    output = tmp_path / "merged.parquet"

    exit_code = main(["-i", str(scores_dir), "-o", str(output), "-b", "2"])

    assert exit_code == 0
    table = pq.read_table(output)
    assert table.schema.names == ["id", "score", "name"]
    assert table.schema.field("id").type == pa.int64()
    assert table.schema.field("score").type == pa.float64()
    assert table.schema.field("name").type == pa.string()
    assert table.to_pylist() == [
        {"id": 1, "score": None, "name": "John"},
        {"id": 2, "score": None, "name": "Jane"},
        {"id": 3, "score": 85.5, "name": "Bob"},
    ]
    assert pq.ParquetFile(output).metadata.num_row_groups == 2


@pytest.mark.e2e
def test_compression_flag(scores_dir, tmp_path):
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(scores_dir), "-o", str(output), "-c", "gzip"]) == 0

    assert pq.ParquetFile(output).metadata.row_group(0).column(0).compression == "GZIP"


@pytest.mark.e2e
def test_print_schema(scores_dir, tmp_path, capsys):
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(scores_dir), "-o", str(output), "--print-schema"]) == 0

    schema = json.loads(capsys.readouterr().out)
    assert schema == {
        "id": {"type": "INT64", "optional": True, "compression": "UNCOMPRESSED"},
        "score": {"type": "DOUBLE", "optional": True, "compression": "UNCOMPRESSED"},
        "name": {"type": "UTF8", "optional": True, "compression": "UNCOMPRESSED"},
    }
    assert not output.exists()


@pytest.mark.e2e
def test_print_spark_schema(scores_dir, tmp_path, capsys):
    output = tmp_path / "merged.parquet"

    assert main([
        "-i", str(scores_dir), "-o", str(output), "--print-schema", "--spark-schema"
    ]) == 0

    schema = json.loads(capsys.readouterr().out)
    assert [(f["name"], f["type"]) for f in schema["fields"]] == [
        ("id", "long"), ("score", "double"), ("name", "string")
    ]


@pytest.mark.e2e
def test_config_file_with_overrides(scores_dir, tmp_path):
    output = tmp_path / "merged.parquet"
    config = tmp_path / "merge.yaml"
    config.write_text(
        "merge:\n"
        f"  input: {scores_dir}\n"
        f"  output: {output}\n"
        "  batch_size: 1\n"
        "  compression: SNAPPY\n"
    )

    assert main(["--config", str(config), "-b", "3"]) == 0

    metadata = pq.ParquetFile(output).metadata
    assert metadata.num_row_groups == 1
    assert metadata.row_group(0).column(0).compression == "SNAPPY"


@pytest.mark.e2e
def test_metrics_file_written(scores_dir, tmp_path):
    output = tmp_path / "merged.parquet"
    metrics_file = tmp_path / "metrics.prom"

    assert main([
        "-i", str(scores_dir), "-o", str(output), "--metrics-file", str(metrics_file)
    ]) == 0

    assert "jsonmerge_records_written_total" in metrics_file.read_text()


@pytest.mark.e2e
@pytest.mark.parametrize("batch_size", ["0", "-3"])
def test_invalid_batch_size(scores_dir, tmp_path, batch_size):
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(scores_dir), "-o", str(output), "-b", batch_size]) == 1
    assert not output.exists()


@pytest.mark.e2e
def test_missing_input_fails(tmp_path):
    assert main(["-i", str(tmp_path / "nope"), "-o", str(tmp_path / "out.parquet")]) == 1


@pytest.mark.e2e
def test_missing_output_fails(scores_dir):
    assert main(["-i", str(scores_dir)]) == 1


@pytest.mark.e2e
def test_validation_skips_file(tmp_path, write_json):
    write_json("input/a.json", [{"id": 1, "name": "a"}])
    write_json("input/b.json", [{"id": 2, "name": "b", "extra": True}])
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(tmp_path / "input"), "-o", str(output), "--validate"]) == 0

    table = pq.read_table(output)
    # a.json lacks the "extra" field that b.json introduced
    assert table.column("id").to_pylist() == [2]
    assert table.schema.names == ["id", "name", "extra"]


@pytest.fixture
def interrupting_reader(monkeypatch):
    """Deliver SIGINT to the CLI's handler on the first file read"""

    class InterruptingReader(JsonFileReader):
        def read_records(self, file_path):
            records = super().read_records(file_path)
            merge_cli.signal_handler(signal.SIGINT, None)
            return records

    monkeypatch.setattr(merger_module, "JsonFileReader", InterruptingReader)


@pytest.mark.e2e
def test_interrupt_during_print_schema(scores_dir, tmp_path, capsys, interrupting_reader):
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(scores_dir), "-o", str(output), "--print-schema"]) == 130
    assert capsys.readouterr().out == ""


@pytest.mark.e2e
def test_interrupt_during_inference_writes_nothing(scores_dir, tmp_path, interrupting_reader):
    output = tmp_path / "merged.parquet"

    assert main(["-i", str(scores_dir), "-o", str(output)]) == 130
    assert not output.exists()
