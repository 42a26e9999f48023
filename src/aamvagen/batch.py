"""Validate and encode many records, with JSONL / Arrow exports of the results."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pyarrow as pa

from aamvagen.encoder import FIELD_SEPARATOR, encode
from aamvagen.errors import EncodingError
from aamvagen.model import AAMVARecord
from aamvagen.validation import validate_record

logger = logging.getLogger(__name__)


@dataclass
class EncodeResult:
    record_index: int
    is_valid: bool
    errors: list[dict[str, str]]
    encoded: str | None = None
    checksum: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_index": self.record_index,
            "is_valid": self.is_valid,
            "errors": self.errors,
            "encoded": self.encoded,
            "checksum": self.checksum,
        }


def _trailing_checksum(encoded: str) -> str:
    return encoded.rsplit(FIELD_SEPARATOR, 1)[-1]


def encode_records(records: Iterable[AAMVARecord], strict: bool = False) -> list[EncodeResult]:
    """Validate each record and encode the ones that pass."""
    results: list[EncodeResult] = []
    for idx, record in enumerate(records):
        outcome = validate_record(record, strict=strict)
        errors = [{"field": e.field, "message": e.message} for e in outcome.errors]
        if not outcome.is_valid:
            results.append(EncodeResult(record_index=idx, is_valid=False, errors=errors))
            continue
        try:
            encoded = encode(record)
        except EncodingError as exc:
            # country is mandatory here but has no validator rule
            logger.debug("record %d failed to encode: %s", idx, exc)
            errors.extend(
                {"field": field, "message": "Required to encode the record"} for field in exc.fields
            )
            results.append(EncodeResult(record_index=idx, is_valid=False, errors=errors))
            continue
        results.append(
            EncodeResult(
                record_index=idx,
                is_valid=True,
                errors=errors,
                encoded=encoded,
                checksum=_trailing_checksum(encoded),
            )
        )
    logger.debug(
        "encoded %d of %d record(s)", sum(1 for r in results if r.is_valid), len(results)
    )
    return results


def results_to_jsonl(results: list[EncodeResult], path: Path) -> None:
    """Write batch results as JSONL, one result per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for r in results:
            f.write(json.dumps(r.to_dict()) + "\n")


def results_to_arrow(results: list[EncodeResult], path: Path) -> None:
    """Write batch results to an Arrow IPC file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.table(
        {
            "record_index": [r.record_index for r in results],
            "is_valid": [r.is_valid for r in results],
            # errors kept as JSON text to keep the schema flat
            "errors": [json.dumps(r.errors) for r in results],
            "encoded": pa.array([r.encoded for r in results], type=pa.string()),
            "checksum": pa.array([r.checksum for r in results], type=pa.string()),
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
