import json
from pathlib import Path

import pytest
import yaml

from aamvagen.errors import RecordFileError
from aamvagen.model import AAMVARecord
from aamvagen.records import load_record, load_records, sample_record


def test_load_record_from_json_and_yaml(tmp_path: Path) -> None:
    json_path = tmp_path / "rec.json"
    json_path.write_text(json.dumps(sample_record()))
    yaml_path = tmp_path / "rec.yaml"
    yaml_path.write_text(yaml.safe_dump(sample_record()))

    from_json = load_record(json_path)
    from_yaml = load_record(yaml_path)
    assert from_json == from_yaml
    assert from_json.personal.unique_id == "D1234567"
    assert from_json.document.issuing_jurisdiction == "CA"


def test_mapping_round_trip():
    record = AAMVARecord.from_mapping(sample_record())
    assert AAMVARecord.from_mapping(record.to_mapping()) == record


def test_missing_keys_become_empty_strings():
    record = AAMVARecord.from_mapping({"personal": {"firstName": "Jane", "height": None}})
    assert record.version == "08"
    assert record.personal.first_name == "Jane"
    assert record.personal.height == ""
    assert record.document.document_type == ""


def test_load_record_errors(tmp_path: Path) -> None:
    with pytest.raises(RecordFileError):
        load_record(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(RecordFileError):
        load_record(broken)
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    with pytest.raises(RecordFileError):
        load_record(listing)


def test_load_records_jsonl_and_yaml_list(tmp_path: Path) -> None:
    jsonl = tmp_path / "batch.jsonl"
    jsonl.write_text(json.dumps(sample_record()) + "\n\n" + json.dumps(sample_record()) + "\n")
    assert len(load_records(jsonl)) == 2

    listing = tmp_path / "batch.yml"
    listing.write_text(yaml.safe_dump([sample_record()]))
    assert len(load_records(listing)) == 1

    single = tmp_path / "single.json"
    single.write_text(json.dumps(sample_record()))
    assert len(load_records(single)) == 1
