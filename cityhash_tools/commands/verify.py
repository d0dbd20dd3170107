"""Verify command for checking a file against a recorded digest."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog
from rich.console import Console

from cityhash_tools.core.config import AppConfig
from cityhash_tools.core.integrity import DigestMismatchError, verify_digest
from cityhash_tools.core.utils import format_digest, parse_digest, read_input

logger = structlog.get_logger()


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.argument("expected")
@click.pass_context
def verify(ctx: click.Context, file: Path, expected: str) -> None:
    """Check that FILE hashes to EXPECTED.

    EXPECTED is read in the configured digest format; a 0x prefix always
    means hex.
    """
    config: AppConfig = ctx.obj["config"]
    console: Console = ctx.obj["console"]

    try:
        expected_value = parse_digest(expected, config.digest_format)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="EXPECTED") from e

    try:
        data = read_input(file, config.max_input_size)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Failed to read {file}: {e}") from e

    try:
        verify_digest(data, expected_value, source=str(file))
        actual = expected_value
        valid = True
    except DigestMismatchError as e:
        actual = e.actual if e.actual is not None else 0
        valid = False

    logger.debug("digest_verified", file=str(file), valid=valid)

    if config.output_format == "json":
        print(json.dumps({
            "file": str(file),
            "expected": format_digest(expected_value, config.digest_format),
            "actual": format_digest(actual, config.digest_format),
            "valid": valid,
        }, indent=2))
    elif config.output_format == "plain":
        click.echo(f"{file}: {'OK' if valid else 'FAILED'}")
    elif valid:
        console.print(f"[green]✓[/green] {file}: digest matches")
    else:
        console.print(
            f"[red]✗[/red] {file}: expected "
            f"{format_digest(expected_value, config.digest_format)}, "
            f"got {format_digest(actual, config.digest_format)}"
        )

    if not valid:
        ctx.exit(1)
