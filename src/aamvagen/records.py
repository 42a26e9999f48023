"""Load AAMVA records from JSON, JSONL or YAML files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from aamvagen.errors import RecordFileError
from aamvagen.model import AAMVARecord

YAML_SUFFIXES = {".yml", ".yaml"}


def read_payload(path: Path) -> Any:
    """Parse a JSON or YAML file (chosen by suffix) into plain Python objects."""
    if not path.is_file():
        raise RecordFileError(f"Record file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise RecordFileError(f"Could not parse {path}: {exc}") from exc


def record_from_payload(payload: Any, source: str = "<payload>") -> AAMVARecord:
    if not isinstance(payload, dict):
        raise RecordFileError(f"{source} must hold a record mapping, got {type(payload).__name__}")
    return AAMVARecord.from_mapping(payload)


def load_record(path: Path) -> AAMVARecord:
    return record_from_payload(read_payload(path), source=str(path))


def _iter_jsonl(path: Path) -> list[Any]:
    payloads = []
    with path.open(encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                payloads.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise RecordFileError(f"{path}:{lineno}: invalid JSON ({exc})") from exc
    return payloads


def load_records(path: Path) -> list[AAMVARecord]:
    """Load many records: JSONL (one per line), or a JSON/YAML list of mappings.

    A file holding a single mapping yields a one-element list.
    """
    if path.suffix.lower() == ".jsonl":
        if not path.is_file():
            raise RecordFileError(f"Record file not found: {path}")
        payloads = _iter_jsonl(path)
    else:
        payload = read_payload(path)
        payloads = payload if isinstance(payload, list) else [payload]
    return [
        record_from_payload(item, source=f"{path}[{idx}]") for idx, item in enumerate(payloads)
    ]


def sample_record() -> dict[str, Any]:
    return {
        "version": "08",
        "document": {
            "documentType": "DL",
            "issueDate": "01/15/2023",
            "expirationDate": "01/15/2028",
            "issuingJurisdiction": "CA",
            "country": "USA",
            "vehicleClassifications": "",
            "restrictionCodes": "",
            "endorsementCodes": "",
        },
        "personal": {
            "firstName": "Jane",
            "middleName": "",
            "lastName": "Doe",
            "dateOfBirth": "05/20/1990",
            "gender": "F",
            "eyeColor": "BLU",
            "hairColor": "BRO",
            "height": "065in",
            "weight": "130",
            "addressStreet": "1 Main St",
            "addressCity": "Springfield",
            "addressState": "CA",
            "addressPostalCode": "90210",
            "country": "USA",
            "uniqueId": "D1234567",
        },
    }
