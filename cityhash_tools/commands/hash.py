"""Hash command for computing CityHash32 digests."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

from cityhash_tools.core.config import AppConfig
from cityhash_tools.core.types import DigestResult
from cityhash_tools.core.utils import (
    format_digest,
    format_size,
    hexlify,
    read_input,
    unhexlify,
)
from cityhash_tools.hashing.city import digest32, main_loop_iterations, select_bracket

logger = structlog.get_logger()


def _get_context_objects(ctx: click.Context) -> tuple[AppConfig, Console, bool]:
    """Extract common context objects."""
    config: AppConfig = ctx.obj["config"]
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj["verbose"]
    return config, console, verbose


def compute_result(data: bytes, source: str) -> DigestResult:
    """Hash data and describe how it was hashed."""
    length = len(data)
    result = DigestResult(
        source=source,
        length=length,
        digest=digest32(data),
        bracket=select_bracket(length),
        iterations=main_loop_iterations(length),
    )
    logger.debug(
        "digest_computed",
        source=source,
        length=length,
        bracket=str(result.bracket),
        digest=result.hex,
    )
    return result


def _collect_inputs(
    files: tuple[Path, ...],
    strings: tuple[str, ...],
    hex_inputs: tuple[str, ...],
    encoding: str,
    max_size: int,
) -> list[tuple[str, bytes]]:
    """Gather (source, data) pairs from every kind of input."""
    inputs: list[tuple[str, bytes]] = []

    for path in files:
        try:
            inputs.append((str(path), read_input(path, max_size)))
        except (OSError, ValueError) as e:
            raise click.ClickException(f"Failed to read {path}: {e}") from e

    for text in strings:
        try:
            inputs.append((repr(text), text.encode(encoding)))
        except (UnicodeEncodeError, LookupError) as e:
            raise click.ClickException(
                f"Cannot encode {text!r} as {encoding}: {e}"
            ) from e

    for hex_str in hex_inputs:
        try:
            data = unhexlify(hex_str)
        except ValueError as e:
            raise click.ClickException(f"Invalid hex input {hex_str!r}: {e}") from e
        inputs.append((f"hex:{hexlify(data)}", data))

    return inputs


def _output_rich(
    results: list[DigestResult], console: Console, config: AppConfig, verbose: bool
) -> None:
    table = Table(title="CityHash32 Digests")
    table.add_column("Source", style="cyan")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Digest", style="green")
    if verbose:
        table.add_column("Bracket", style="blue")
        table.add_column("Iterations", style="blue", justify="right")

    for result in results:
        row = [
            result.source,
            format_size(result.length),
            format_digest(result.digest, config.digest_format),
        ]
        if verbose:
            row.extend([str(result.bracket), str(result.iterations)])
        table.add_row(*row)

    console.print(table)


@click.command(name="hash")
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option("--string", "-s", "strings", multiple=True, help="Hash a text string")
@click.option("--hex", "-x", "hex_inputs", multiple=True, help="Hash hex-encoded bytes")
@click.option("--encoding", "-e", help="Text encoding for --string (default from config)")
@click.pass_context
def hash_command(
    ctx: click.Context,
    files: tuple[Path, ...],
    strings: tuple[str, ...],
    hex_inputs: tuple[str, ...],
    encoding: str | None,
) -> None:
    """Compute CityHash32 digests of files, strings or hex bytes.

    Use - as a file name to read standard input.
    """
    config, console, verbose = _get_context_objects(ctx)

    if not (files or strings or hex_inputs):
        raise click.UsageError("No input given. Pass files, --string or --hex.")

    inputs = _collect_inputs(
        files,
        strings,
        hex_inputs,
        encoding or config.text_encoding,
        config.max_input_size,
    )
    results = [compute_result(data, source) for source, data in inputs]

    if config.output_format == "json":
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
    elif config.output_format == "plain":
        for result in results:
            click.echo(f"{format_digest(result.digest, config.digest_format)}  {result.source}")
    else:
        _output_rich(results, console, config, verbose)
