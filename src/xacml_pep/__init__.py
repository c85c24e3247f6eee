"""xacml-pep: XACML JSON Profile client for Policy Enforcement Points.

Builds XACML JSON requests, sends them to a remote Policy Decision Point
over HTTP(S) with Basic authentication, and reconciles the JSON Profile
1.0 (object-or-array) and 1.1 (always-array) response shapes into one
canonical Response.

Usage:
    from xacml_pep import AuthZClient, ClientConfiguration, Category, RequestBuilder

    config = ClientConfiguration(pdp_url="https://pdp.example.com/authorize",
                                 username="pep", password="secret")
    request = (
        RequestBuilder()
        .add_access_subject_category(Category().add("role", "user"))
        .add_resource_category(Category().add("objectId", "sbie"))
        .add_action_category(Category().add("actionId", "access"))
        .build()
    )
    with AuthZClient(config) as client:
        response = client.make_authorization_request(request)
"""

__version__ = "0.3.0"

from xacml_pep.client import AsyncAuthZClient, AuthZClient
from xacml_pep.config import ClientConfiguration, LoggingConfig, TimeoutConfig, TLSConfig
from xacml_pep.model import (
    Attribute,
    Category,
    Decision,
    Request,
    RequestBuilder,
    Response,
    Result,
    SingleResponse,
)
from xacml_pep.reconcile import decode_payload, reconcile

__all__ = [
    "__version__",
    # Clients
    "AuthZClient",
    "AsyncAuthZClient",
    # Configuration
    "ClientConfiguration",
    "LoggingConfig",
    "TLSConfig",
    "TimeoutConfig",
    # Models
    "Attribute",
    "Category",
    "Decision",
    "Request",
    "RequestBuilder",
    "Response",
    "Result",
    "SingleResponse",
    # Reconciliation
    "decode_payload",
    "reconcile",
]
