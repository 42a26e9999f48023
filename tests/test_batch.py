import json
from pathlib import Path

import pyarrow.ipc as pa_ipc

from aamvagen.batch import encode_records, results_to_arrow, results_to_jsonl
from aamvagen.model import AAMVARecord
from aamvagen.records import sample_record


def _records() -> list[AAMVARecord]:
    bad = sample_record()
    bad["personal"]["addressCity"] = ""
    return [AAMVARecord.from_mapping(sample_record()), AAMVARecord.from_mapping(bad)]


def test_encode_records_validates_each_record():
    results = encode_records(_records())
    assert [r.is_valid for r in results] == [True, False]
    assert results[0].encoded is not None
    assert results[0].encoded.endswith(results[0].checksum)
    assert results[1].encoded is None
    assert results[1].errors == [
        {"field": "addressCity", "message": "City is required and must be 20 characters or less"}
    ]


def test_results_to_jsonl_and_arrow(tmp_path: Path) -> None:
    results = encode_records(_records())
    jsonl_path = tmp_path / "out.jsonl"
    arrow_path = tmp_path / "out.arrow"

    results_to_jsonl(results, jsonl_path)
    lines = jsonl_path.read_text().splitlines()
    assert len(lines) == 2
    assert json.loads(lines[1])["is_valid"] is False

    results_to_arrow(results, arrow_path)
    with pa_ipc.open_file(arrow_path) as reader:
        table = reader.read_all()
    assert table.num_rows == 2
    assert table.column("checksum").to_pylist()[1] is None


def test_encode_records_reports_encoding_failures():
    no_country = sample_record()
    no_country["document"]["country"] = ""
    results = encode_records(
        [AAMVARecord.from_mapping(sample_record()), AAMVARecord.from_mapping(no_country)]
    )
    assert [r.is_valid for r in results] == [True, False]
    assert results[1].encoded is None
    assert results[1].errors == [
        {"field": "country", "message": "Required to encode the record"}
    ]
