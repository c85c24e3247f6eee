"""Config commands for xacml-pep CLI."""

from __future__ import annotations

__all__ = ["config"]

import json
from pathlib import Path

import click
from pydantic import ValidationError

from xacml_pep.cli.styling import style_error, style_success, style_warning
from xacml_pep.config import ClientConfiguration, TLSConfig
from xacml_pep.exceptions import ConfigurationError
from xacml_pep.utils.file_helpers import format_validation_errors


@click.group()
def config() -> None:
    """Client configuration commands."""


@config.command("validate")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def validate(path: Path) -> None:
    """Validate a client configuration file.

    Exits with status 1 when the file is missing or invalid.
    """
    try:
        loaded = ClientConfiguration.load_from_file(path)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e

    if loaded.tls.trust_all_certificates:
        click.echo(style_warning("trust_all_certificates is enabled"))
    if not loaded.is_https:
        click.echo(style_warning("PDP URL is not HTTPS; credentials are sent in clear text"))
    click.echo(style_success(f"Configuration is valid: {path}"))


@config.command("show")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def show(path: Path) -> None:
    """Print a configuration file with defaults filled in (password hidden)."""
    try:
        loaded = ClientConfiguration.load_from_file(path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(loaded.model_dump(mode="json"), indent=2))


@config.command("init")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--url", "pdp_url", required=True, help="PDP URL")
@click.option("--username", "-u", required=True, help="Basic auth username")
@click.option(
    "--credential-key", required=True,
    help="OS keychain key holding the password (the password is never written)",
)
@click.option(
    "--ca-bundle", type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="CA bundle (PEM) trusted for the PDP certificate",
)
@click.option("--insecure", "-k", is_flag=True, help="Trust any PDP certificate (development only)")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(
    path: Path,
    pdp_url: str,
    username: str,
    credential_key: str,
    ca_bundle: str | None,
    insecure: bool,
    force: bool,
) -> None:
    """Write a new client configuration file.

    The file is created with owner-only permissions. Store the password
    separately with: keyring set xacml-pep CREDENTIAL_KEY
    """
    if path.exists() and not force:
        click.echo(style_error(f"Configuration file already exists: {path} (use --force to overwrite)"), err=True)
        raise SystemExit(1)

    try:
        new_config = ClientConfiguration(
            pdp_url=pdp_url,
            username=username,
            credential_key=credential_key,
            tls=TLSConfig(trust_all_certificates=insecure, ca_bundle_path=ca_bundle),
        )
    except ValidationError as e:
        click.echo(style_error(f"Invalid configuration:\n{format_validation_errors(e)}"), err=True)
        raise SystemExit(1) from e

    new_config.save_to_file(path)

    if insecure:
        click.echo(style_warning("trust_all_certificates is enabled"))
    click.echo(style_success(f"Configuration written: {path}"))
