"""Request command for xacml-pep CLI.

Prints the XACML JSON request that `decide` would send, without sending it.
"""

from __future__ import annotations

__all__ = ["request"]

import click

from xacml_pep.cli.options import build_request, request_options


@click.command()
@request_options
def request(
    subject: list[tuple[str, str]],
    resource: list[tuple[str, str]],
    action: list[tuple[str, str]],
    environment: list[tuple[str, str]],
    return_policy_ids: bool,
) -> None:
    """Print the request JSON for the given attributes.

    Examples:
        xacml-pep request -s role=user -r objectId=sbie -a actionId=access
    """
    built = build_request(subject, resource, action, environment, return_policy_ids)
    click.echo(built.to_json(indent=2))
