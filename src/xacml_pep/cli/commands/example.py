"""Example-request command for xacml-pep CLI."""

from __future__ import annotations

__all__ = ["build_example_request", "example_request"]

import click

from xacml_pep.model.category import Category
from xacml_pep.model.request import Request, RequestBuilder


def build_example_request() -> Request:
    """Sample request: a user asking to access object "sbie"."""
    subject = Category().add("Attributes.access_subject.iub", "123").add("Attributes.access_subject.role", "user")
    resource = Category().add("bnc.object.objectId", "sbie")
    action = Category().add("bnc.action.actionId", "access")
    return (
        RequestBuilder()
        .add_access_subject_category(subject)
        .add_resource_category(resource)
        .add_action_category(action)
        .return_policy_id_list()
        .build()
    )


@click.command("example-request")
def example_request() -> None:
    """Print a sample XACML JSON request."""
    click.echo(build_example_request().to_json(indent=2))
