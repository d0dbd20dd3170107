"""Inspect command showing how an input length is hashed."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from cityhash_tools.core.config import AppConfig
from cityhash_tools.hashing.city import main_loop_iterations, seed_offsets, select_bracket


@click.command()
@click.argument("length", type=click.IntRange(min=0))
@click.pass_context
def inspect(ctx: click.Context, length: int) -> None:
    """Show the strategy, word offsets and loop count for LENGTH bytes."""
    config: AppConfig = ctx.obj["config"]
    console: Console = ctx.obj["console"]

    bracket = select_bracket(length)
    offsets = seed_offsets(length)
    iterations = main_loop_iterations(length)

    if config.output_format == "json":
        print(json.dumps({
            "length": length,
            "bracket": str(bracket),
            "seed_offsets": offsets,
            "iterations": iterations,
            "bytes_looped": iterations * 20,
        }, indent=2))
        return

    if config.output_format == "plain":
        click.echo(f"length: {length}")
        click.echo(f"bracket: {bracket}")
        click.echo(f"seed offsets: {' '.join(str(o) for o in offsets) or '-'}")
        click.echo(f"iterations: {iterations}")
        return

    table = Table(title=f"CityHash32 plan for {length} bytes")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Bracket", str(bracket))
    table.add_row("Seed offsets", ", ".join(str(o) for o in offsets) or "none")
    table.add_row("Loop iterations", str(iterations))
    if iterations:
        table.add_row("Looped bytes", f"0..{iterations * 20 - 1}")

    console.print(table)
