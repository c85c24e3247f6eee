"""Shared fixtures for xacml_pep tests."""

import logging
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from xacml_pep.config import ClientConfiguration
from xacml_pep.model import Category, Request, RequestBuilder
from xacml_pep.telemetry.wire_logger import get_wire_logger

PDP_URL = "https://pdp.example.com/authorize"

PERMIT_RESULT = {"Decision": "Permit"}
DENY_RESULT = {"Decision": "Deny"}


@pytest.fixture(autouse=True)
def reset_loggers() -> Iterator[None]:
    """Undo configure_logging() side effects between tests."""
    yield
    wire_logger = get_wire_logger()
    for handler in list(wire_logger.handlers):
        wire_logger.removeHandler(handler)
        handler.close()
    wire_logger.setLevel(logging.NOTSET)
    wire_logger.propagate = True
    logging.getLogger("xacml_pep").setLevel(logging.NOTSET)


@pytest.fixture
def client_config() -> ClientConfiguration:
    """HTTPS configuration with an inline password."""
    return ClientConfiguration(pdp_url=PDP_URL, username="pep", password="secret")


@pytest.fixture
def single_request() -> Request:
    """One subject, one resource, one action: a single-decision request."""
    return (
        RequestBuilder()
        .add_access_subject_category(Category().add("Attributes.access_subject.role", "user"))
        .add_resource_category(Category().add("bnc.object.objectId", "sbie"))
        .add_action_category(Category().add("bnc.action.actionId", "access"))
        .build()
    )


@pytest.fixture
def multi_request() -> Request:
    """Two resources: a Multiple Decision Profile request."""
    return (
        RequestBuilder()
        .add_access_subject_category(Category().add("Attributes.access_subject.role", "user"))
        .add_resource_category(Category().add("bnc.object.objectId", "sbie"))
        .add_resource_category(Category().add("bnc.object.objectId", "ledger"))
        .add_action_category(Category().add("bnc.action.actionId", "access"))
        .build()
    )


@pytest.fixture
def json_pdp() -> Callable[..., httpx.MockTransport]:
    """Factory for a MockTransport answering every call with one JSON body."""

    def factory(body: Any, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return httpx.MockTransport(handler)

    return factory
