import logging
from pathlib import Path
from typing import NoReturn

import orjson
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from aamvagen.batch import encode_records, results_to_arrow, results_to_jsonl
from aamvagen.catalog.fields import FIELD_GROUPS, lookup
from aamvagen.encoder import encode
from aamvagen.errors import AAMVAError
from aamvagen.model import AAMVARecord
from aamvagen.preview import to_preview_map
from aamvagen.records import load_records, read_payload, record_from_payload, sample_record
from aamvagen.render import RenderConfig, default_image_name, save_barcode
from aamvagen.validation import ValidationOutcome, validate_record

app = typer.Typer(help="Build AAMVA DL/ID records and PDF417 barcodes from structured data.")
console = Console()
logger = logging.getLogger("aamvagen")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(exc: AAMVAError) -> NoReturn:
    console.print(f"[bold red]{exc.stage} failed:[/] {exc}")
    raise typer.Exit(1)


def _print_json(payload: object) -> None:
    # no wrapping or markup, the output must stay parseable
    text = orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _load(path: Path) -> tuple[AAMVARecord, dict]:
    try:
        payload = read_payload(path)
        record = record_from_payload(payload, source=str(path))
    except AAMVAError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return record, payload


def _print_errors(outcome: ValidationOutcome) -> None:
    table = Table(title="Validation errors", show_lines=False)
    table.add_column("Field", style="bold")
    table.add_column("Message")
    for error in outcome.errors:
        table.add_row(error.field, error.message)
    console.print(table)


def _gate(record: AAMVARecord, strict: bool) -> None:
    outcome = validate_record(record, strict=strict)
    if not outcome.is_valid:
        _print_errors(outcome)
        console.print(f"[bold red]validate failed:[/] {len(outcome.errors)} error(s)")
        raise typer.Exit(1)


@app.command()
def validate(
    input: Path = typer.Argument(..., help="Record file (json/yaml)."),
    strict: bool = typer.Option(False, "--strict", help="Also apply element format rules."),
    json_output: bool = typer.Option(False, "--json", help="Emit the outcome as JSON."),
) -> None:
    """Validate a record and list every failing field."""
    record, _ = _load(input)
    outcome = validate_record(record, strict=strict)
    if json_output:
        _print_json(outcome.to_dict())
    elif outcome.is_valid:
        console.print(f"[bold green]Valid[/] record in {input}")
    else:
        _print_errors(outcome)
    if not outcome.is_valid:
        raise typer.Exit(1)


@app.command("encode")
def encode_cmd(
    input: Path = typer.Argument(..., help="Record file (json/yaml)."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the raw encoded record to this path."
    ),
    strict: bool = typer.Option(False, "--strict", help="Also apply element format rules."),
    escape: bool = typer.Option(
        False, "--escape", help="Print control separators as escapes instead of raw bytes."
    ),
) -> None:
    """Validate, then encode a record into AAMVA text."""
    record, _ = _load(input)
    _gate(record, strict)
    try:
        text = encode(record)
    except AAMVAError as exc:
        _fail(exc)
    if output:
        output.write_bytes(text.encode("utf-8"))
        console.print(f"[bold green]Wrote encoded record[/] ({len(text)} chars) to {output}")
    elif escape:
        console.print(repr(text), markup=False, highlight=False, soft_wrap=True)
    else:
        typer.echo(text, nl=False)


@app.command()
def preview(
    input: Path = typer.Argument(..., help="Record file (json/yaml)."),
) -> None:
    """Show the human-readable review of a record."""
    record, _ = _load(input)
    table = Table(title="Data Preview")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for label, value in to_preview_map(record).items():
        table.add_row(label, value)
    console.print(table)


@app.command()
def render(
    input: Path = typer.Argument(..., help="Record file (json/yaml)."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="PNG path; defaults to <type>_<last>_<first>.png."
    ),
    module_width: int | None = typer.Option(None, "--module-width", help="Pixels per module."),
    row_height_ratio: int | None = typer.Option(
        None, "--row-height-ratio", help="Row height as a multiple of module width."
    ),
    security_level: int | None = typer.Option(
        None, "--security-level", help="PDF417 error correction level (0-8)."
    ),
    columns: int | None = typer.Option(None, "--columns", help="Data columns (1-30)."),
    inverted: bool | None = typer.Option(
        None, "--inverted/--no-inverted", help="Light modules on a dark background."
    ),
    strict: bool = typer.Option(False, "--strict", help="Also apply element format rules."),
) -> None:
    """Validate, encode and render a record as a PDF417 PNG."""
    record, payload = _load(input)
    _gate(record, strict)

    base = payload.get("render") or {}
    overrides = {
        "module_width": module_width,
        "row_height_ratio": row_height_ratio,
        "security_level": security_level,
        "columns": columns,
        "inverted": inverted,
    }
    try:
        config = RenderConfig.from_mapping(
            {**base, **{k: v for k, v in overrides.items() if v is not None}}
        )
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"invalid render settings: {exc}") from exc
    logger.debug("render config: %s", config.to_dict())

    target = output or Path(default_image_name(record))
    try:
        save_barcode(encode(record), target, config)
    except AAMVAError as exc:
        _fail(exc)
    console.print(f"[bold green]Wrote barcode[/] to {target}")


@app.command()
def sample(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the sample record (json or yaml by suffix)."
    ),
) -> None:
    """Emit a complete example record to start from."""
    payload = sample_record()
    if output is None:
        _print_json(payload)
        return
    if output.suffix.lower() in {".yml", ".yaml"}:
        output.write_text(yaml.safe_dump(payload, sort_keys=False))
    else:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    console.print(f"[bold green]Wrote sample record[/] to {output}")


@app.command()
def batch(
    input: Path = typer.Argument(..., help="JSONL file, or JSON/YAML list of records."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write results as JSONL."),
    arrow: Path | None = typer.Option(None, "--arrow", help="Write results as Arrow IPC."),
    strict: bool = typer.Option(False, "--strict", help="Also apply element format rules."),
) -> None:
    """Validate and encode every record in a file."""
    try:
        records = load_records(input)
    except AAMVAError as exc:
        raise typer.BadParameter(str(exc)) from exc
    results = encode_records(records, strict=strict)
    valid = sum(1 for r in results if r.is_valid)
    console.print(f"[bold green]Encoded[/] {valid} of {len(results)} record(s) from {input}")

    if output:
        results_to_jsonl(results, output)
        console.print(f"[bold green]Wrote JSONL results[/] to {output}")
    if arrow:
        results_to_arrow(results, arrow)
        console.print(f"[bold green]Wrote Arrow results[/] to {arrow}")
    if not output and not arrow:
        _print_json([r.to_dict() for r in results])
    if valid != len(results):
        raise typer.Exit(1)


@app.command()
def fields() -> None:
    """List form fields by group with their data elements."""
    for group in FIELD_GROUPS:
        table = Table(title=group.label)
        for column in ("Field", "Label", "Element", "Max", "Required"):
            table.add_column(column)
        for item in group.fields:
            spec = lookup(item.element_code) if item.element_code else None
            table.add_row(
                item.field_id,
                item.label,
                item.element_code or "-",
                str(spec.max_length) if spec else "-",
                "yes" if item.required else "no",
            )
        console.print(table)


if __name__ == "__main__":
    app()
