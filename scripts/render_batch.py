"""Render every valid record in a batch file to PDF417 PNGs plus a JSONL summary."""

from __future__ import annotations

import json
from pathlib import Path

from aamvagen.batch import encode_records, results_to_jsonl
from aamvagen.records import load_records
from aamvagen.render import RenderConfig, default_image_name, save_barcode


def render_batch(records_path: Path, output_dir: Path, config: RenderConfig) -> dict:
    records = load_records(records_path)
    results = encode_records(records)

    output_dir.mkdir(parents=True, exist_ok=True)
    images: list[str] = []
    for record, result in zip(records, results, strict=True):
        if not result.is_valid or result.encoded is None:
            continue
        name = f"{result.record_index:04d}_{default_image_name(record)}"
        images.append(str(save_barcode(result.encoded, output_dir / name, config)))

    summary_path = output_dir / f"{records_path.stem}_results.jsonl"
    results_to_jsonl(results, summary_path)
    return {
        "source": str(records_path),
        "records": len(results),
        "rendered": len(images),
        "images": images,
        "results": str(summary_path),
    }


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Render a batch of AAMVA records to PNG.")
    parser.add_argument("records", type=Path, help="JSONL, or JSON/YAML list of records.")
    parser.add_argument(
        "--output-dir", type=Path, default=Path("artifacts/barcodes"), help="Where to write PNGs."
    )
    parser.add_argument("--columns", type=int, default=10, help="PDF417 data columns.")
    parser.add_argument("--no-inverted", action="store_true", help="Dark modules on white.")
    args = parser.parse_args()

    cfg = RenderConfig(columns=args.columns, inverted=not args.no_inverted)
    summary = render_batch(args.records, args.output_dir, cfg)
    print(json.dumps(summary, indent=2))
