"""Decide command for xacml-pep CLI.

Builds a request from command-line attributes, sends it to the PDP and
prints the decisions.
"""

from __future__ import annotations

__all__ = ["decide"]

import json
from pathlib import Path

import click

from xacml_pep.cli.options import build_configuration, build_request, connection_options, request_options
from xacml_pep.cli.styling import style_decision, style_label, style_warning
from xacml_pep.client import AuthZClient
from xacml_pep.exceptions import AuthZClientError
from xacml_pep.model.response import Response
from xacml_pep.telemetry.system_logger import configure_logging


@click.command()
@connection_options
@request_options
@click.option("--json", "as_json", is_flag=True, help="Output the canonical response as JSON")
@click.option("--debug", is_flag=True, help="Log PDP traffic to stderr")
def decide(
    config_path: Path | None,
    pdp_url: str | None,
    username: str | None,
    password: str | None,
    insecure: bool,
    subject: list[tuple[str, str]],
    resource: list[tuple[str, str]],
    action: list[tuple[str, str]],
    environment: list[tuple[str, str]],
    return_policy_ids: bool,
    as_json: bool,
    debug: bool,
) -> None:
    """Ask the PDP for a decision.

    Examples:
        xacml-pep decide --url https://pdp/authorize -u pep \\
            -s role=user -r objectId=sbie -a actionId=access

        XACML_PEP_PASSWORD=secret xacml-pep decide -c client.json -s role=admin --json
    """
    configuration = build_configuration(config_path, pdp_url, username, password, insecure)
    if debug:
        configuration = configuration.model_copy(
            update={"logging": configuration.logging.model_copy(update={"log_level": "DEBUG"})}
        )
    configure_logging(configuration.logging)

    if configuration.tls.trust_all_certificates:
        click.echo(style_warning("PDP certificate verification is disabled"), err=True)

    request = build_request(subject, resource, action, environment, return_policy_ids)

    try:
        with AuthZClient(configuration) as client:
            response = client.make_authorization_request(request)
    except AuthZClientError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    if as_json:
        click.echo(json.dumps(response.to_wire(), indent=2))
    else:
        _print_response(response)


def _print_response(response: Response) -> None:
    """Print one line per result, plus applicable policies when returned."""
    many = len(response.results) > 1
    for index, result in enumerate(response.results, start=1):
        label = f"Decision {index}" if many else "Decision"
        click.echo(f"{style_label(label)} {style_decision(result.decision)}")
        if result.status is not None and result.status.status_message:
            click.echo(f"  {style_label('Status')} {result.status.status_message}")
        if result.policy_identifier_list is not None:
            for ref in result.policy_identifier_list.policy_id_reference:
                click.echo(f"  {style_label('Policy')} {ref.id}")
            for ref in result.policy_identifier_list.policy_set_id_reference:
                click.echo(f"  {style_label('Policy set')} {ref.id}")
