"""Shared CLI options and helpers for building requests and configuration."""

from __future__ import annotations

__all__ = [
    "build_configuration",
    "build_request",
    "connection_options",
    "parse_attribute",
    "request_options",
]

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from pydantic import ValidationError

from xacml_pep.config import ClientConfiguration
from xacml_pep.constants import PASSWORD_ENV_VAR
from xacml_pep.model.category import Category
from xacml_pep.model.request import Request, RequestBuilder
from xacml_pep.utils.file_helpers import format_validation_errors, load_json_file

F = TypeVar("F", bound=Callable[..., Any])


def parse_attribute(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[tuple[str, str]]:
    """Click callback turning repeated ID=VALUE options into pairs."""
    pairs = []
    for raw in values:
        attribute_id, sep, value = raw.partition("=")
        if not sep or not attribute_id or not value:
            raise click.BadParameter(f"expected ID=VALUE, got '{raw}'", ctx=ctx, param=param)
        pairs.append((attribute_id, value))
    return pairs


def request_options(func: F) -> F:
    """Options describing the request: category attributes and flags."""
    options = [
        click.option(
            "--subject", "-s", "subject", multiple=True, callback=parse_attribute,
            metavar="ID=VALUE", help="Access subject attribute (repeatable)",
        ),
        click.option(
            "--resource", "-r", "resource", multiple=True, callback=parse_attribute,
            metavar="ID=VALUE", help="Resource attribute (repeatable)",
        ),
        click.option(
            "--action", "-a", "action", multiple=True, callback=parse_attribute,
            metavar="ID=VALUE", help="Action attribute (repeatable)",
        ),
        click.option(
            "--environment", "-e", "environment", multiple=True, callback=parse_attribute,
            metavar="ID=VALUE", help="Environment attribute (repeatable)",
        ),
        click.option("--return-policy-ids", is_flag=True, help="Ask the PDP for applicable policy ids"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def connection_options(func: F) -> F:
    """Options describing the PDP connection."""
    options = [
        click.option(
            "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Client configuration JSON file",
        ),
        click.option("--url", "pdp_url", help="PDP URL (overrides config file)"),
        click.option("--username", "-u", help="Basic auth username (overrides config file)"),
        click.option(
            "--password", envvar=PASSWORD_ENV_VAR, show_envvar=True,
            help="Basic auth password (overrides config file)",
        ),
        click.option("--insecure", "-k", is_flag=True, help="Trust any PDP certificate (development only)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _category(pairs: list[tuple[str, str]]) -> Category:
    category = Category()
    for attribute_id, value in pairs:
        category.add(attribute_id, value)
    return category


def build_request(
    subject: list[tuple[str, str]],
    resource: list[tuple[str, str]],
    action: list[tuple[str, str]],
    environment: list[tuple[str, str]],
    return_policy_ids: bool,
) -> Request:
    """Build a request with one category per non-empty option group."""
    builder = RequestBuilder().return_policy_id_list(return_policy_ids)
    if subject:
        builder.add_access_subject_category(_category(subject))
    if resource:
        builder.add_resource_category(_category(resource))
    if action:
        builder.add_action_category(_category(action))
    if environment:
        builder.add_environment_category(_category(environment))
    return builder.build()


def build_configuration(
    config_path: Path | None,
    pdp_url: str | None,
    username: str | None,
    password: str | None,
    insecure: bool,
) -> ClientConfiguration:
    """Merge config file and command-line overrides into a configuration.

    Raises:
        click.ClickException: If the result is incomplete or invalid.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        # Validated after merging, so the file may omit what the command line supplies
        try:
            loaded = load_json_file(config_path, file_type="client config")
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        if not isinstance(loaded, dict):
            raise click.ClickException(f"Client config file {config_path} must hold a JSON object")
        data = loaded

    overrides = {"pdp_url": pdp_url, "username": username, "password": password}
    data.update({k: v for k, v in overrides.items() if v is not None})
    if insecure:
        data["tls"] = {**(data.get("tls") or {}), "trust_all_certificates": True}

    try:
        return ClientConfiguration.model_validate(data)
    except ValidationError as e:
        raise click.ClickException("Invalid client configuration:\n" + format_validation_errors(e)) from e
