"""Main CLI entry point for xacml-pep.

Defines the CLI group and registers all subcommands.

Commands:
    decide           - Send a request to the PDP and print the decisions
    request          - Print the request JSON without sending it
    example-request  - Print a sample request
    config           - Configuration file commands (init, validate, show)

Subcommand help:
    xacml-pep COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli"]

import sys

import click

from xacml_pep import __version__

from .commands.config import config
from .commands.decide import decide
from .commands.example import example_request
from .commands.request import request


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """xacml-pep: XACML JSON Profile client for Policy Enforcement Points."""
    if version:
        click.echo(f"xacml-pep {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(config)
cli.add_command(decide)
cli.add_command(example_request)
cli.add_command(request)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
