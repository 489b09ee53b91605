"""CLI entry point for phantom-batch."""

from __future__ import annotations

import click

from src.cli.commands import batch, init_config


@click.group()
def cli() -> None:
    """Run operations across many services with bounded concurrency."""


cli.add_command(batch)
cli.add_command(init_config)
