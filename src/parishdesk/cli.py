#!/usr/bin/env python
"""
Command line tools for ParishDesk receipts.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import click
import httpx

from parishdesk.receipts import (
    InvalidReceiptArgument,
    ReceiptDocument,
    ReceiptDocumentBuilder,
    ReceiptFormat,
    UnknownReceiptFormat,
    present,
    save,
)
from parishdesk.settings import get_settings


def _load_payload(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"{path}: cannot read receipt data ({exc})")
    if not isinstance(payload, dict):
        raise click.ClickException(f"{path}: expected a JSON object")
    return payload


def _parse_format(ctx: click.Context, param: click.Parameter, value: str) -> ReceiptFormat:
    try:
        return ReceiptFormat.parse(value)
    except UnknownReceiptFormat as exc:
        raise click.BadParameter(exc.message)


@click.group()
def cli() -> None:
    """ParishDesk receipts CLI."""
    pass


@cli.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--format",
    "fmt",
    default=ReceiptFormat.FULL_PAGE.value,
    show_default=True,
    callback=_parse_format,
    help="Paper format: full-page, thermal-wide or thermal-narrow (a4, thermal-80, thermal-58)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the generated PDFs (defaults to RECEIPTS__OUTPUT_DIR)",
)
@click.option(
    "--print", "print_", is_flag=True, help="Open each receipt and send it to the printer"
)
def receipt(
    files: tuple[Path, ...], fmt: ReceiptFormat, output_dir: Path | None, print_: bool
) -> None:
    """Render receipts from JSON files with transaction, organization and payer."""
    output_dir = output_dir or get_settings().receipts.output_dir
    payloads = [_load_payload(path) for path in files]

    async def _build_all() -> list[ReceiptDocument]:
        async with httpx.AsyncClient(timeout=get_settings().receipts.logo_fetch_timeout) as client:
            builder = ReceiptDocumentBuilder(http_client=client)
            return await asyncio.gather(
                *(
                    builder.build(
                        payload.get("transaction"),
                        payload.get("organization"),
                        payload.get("payer"),
                        fmt,
                    )
                    for payload in payloads
                )
            )

    try:
        documents = asyncio.run(_build_all())
    except InvalidReceiptArgument as exc:
        raise click.ClickException(exc.message)

    for document in documents:
        path = save(document, output_dir)
        click.echo(f"Saved {path}")
        if print_ and not present(document):
            click.echo(f"Could not open {document.filename} for printing", err=True)


if __name__ == "__main__":
    cli()
