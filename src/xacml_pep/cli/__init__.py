"""Command-line interface for xacml-pep."""

from xacml_pep.cli.main import cli

__all__ = ["cli"]
