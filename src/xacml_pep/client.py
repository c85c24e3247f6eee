"""Authorization client facade for Policy Enforcement Points.

Composes the three steps of an authorization call:

    Request --(transport.send)--> Response | SingleResponse --(reconcile)--> Response

The transport is chosen at construction time. By default an httpx backend
is built from the configuration; any object satisfying PDPTransport (or
AsyncPDPTransport) can be passed instead.
"""

from __future__ import annotations

__all__ = [
    "AsyncAuthZClient",
    "AuthZClient",
]

import logging
from typing import TYPE_CHECKING, Any

from xacml_pep.exceptions import AuthZClientError, ConfigurationError
from xacml_pep.reconcile import reconcile
from xacml_pep.telemetry.system_logger import get_system_logger
from xacml_pep.transport.protocol import ResponseVariant

if TYPE_CHECKING:
    from xacml_pep.config import ClientConfiguration
    from xacml_pep.model.request import Request
    from xacml_pep.model.response import Response
    from xacml_pep.transport.protocol import AsyncPDPTransport, PDPTransport

logger = logging.getLogger(__name__)


def _require_configuration(configuration: "ClientConfiguration | None") -> "ClientConfiguration":
    if configuration is None:
        raise ConfigurationError("Client configuration must be non-null")
    if not configuration.pdp_url:
        raise ConfigurationError("Client configuration must contain a non-empty PDP URL")
    return configuration


def _report_failure(error: AuthZClientError, url: str) -> None:
    get_system_logger().warning(
        {
            "event": "pdp_call_failed",
            "message": f"Authorization request to {url} failed: {error}",
            "error_type": type(error).__name__,
            "url": url,
        }
    )


class AuthZClient:
    """Synchronous client sending XACML JSON requests to a PDP.

    The returned Response is always in the JSON Profile 1.1 shape (an array
    of results). PDPs answering in the 1.0 shape (a single result object)
    are supported; their result is promoted into a Response.

    Usage:
        with AuthZClient(config) as client:
            response = client.make_authorization_request(request)
            for result in response.results:
                print(result.decision)
    """

    def __init__(
        self,
        configuration: "ClientConfiguration | None",
        transport: "PDPTransport | None" = None,
    ) -> None:
        """Initialize the client.

        Args:
            configuration: Client configuration (PDP URL, credentials, TLS).
            transport: Optional transport; defaults to HttpxTransport.

        Raises:
            ConfigurationError: If configuration is missing or unusable.
        """
        self._configuration = _require_configuration(configuration)
        if transport is None:
            from xacml_pep.transport.httpx_transport import HttpxTransport

            transport = HttpxTransport(self._configuration)
        self._transport = transport

    @property
    def configuration(self) -> "ClientConfiguration":
        return self._configuration

    def make_authorization_request(self, request: "Request") -> "Response":
        """Send the request to the PDP and return the canonical response.

        Args:
            request: The XACML request.

        Returns:
            Response with at least one Result.

        Raises:
            TransportError: The PDP could not be reached.
            PDPHTTPError: The PDP returned a non-2xx status.
            ResponseDeserializationError: The body is not a JSON Profile response.
        """
        variant = ResponseVariant.for_request(request)
        try:
            payload = self._transport.send(request, variant)
            response = reconcile(request, payload)
        except AuthZClientError as e:
            _report_failure(e, self._configuration.pdp_url)
            raise
        logger.debug("PDP decisions: %s", [d.value for d in response.decisions])
        return response

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "AuthZClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncAuthZClient:
    """Asynchronous counterpart of AuthZClient.

    Usage:
        async with AsyncAuthZClient(config) as client:
            response = await client.make_authorization_request(request)
    """

    def __init__(
        self,
        configuration: "ClientConfiguration | None",
        transport: "AsyncPDPTransport | None" = None,
    ) -> None:
        """Initialize the client.

        Args:
            configuration: Client configuration (PDP URL, credentials, TLS).
            transport: Optional async transport; defaults to AsyncHttpxTransport.

        Raises:
            ConfigurationError: If configuration is missing or unusable.
        """
        self._configuration = _require_configuration(configuration)
        if transport is None:
            from xacml_pep.transport.httpx_transport import AsyncHttpxTransport

            transport = AsyncHttpxTransport(self._configuration)
        self._transport = transport

    @property
    def configuration(self) -> "ClientConfiguration":
        return self._configuration

    async def make_authorization_request(self, request: "Request") -> "Response":
        """Send the request to the PDP and return the canonical response.

        See AuthZClient.make_authorization_request.
        """
        variant = ResponseVariant.for_request(request)
        try:
            payload = await self._transport.send(request, variant)
            response = reconcile(request, payload)
        except AuthZClientError as e:
            _report_failure(e, self._configuration.pdp_url)
            raise
        logger.debug("PDP decisions: %s", [d.value for d in response.decisions])
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "AsyncAuthZClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
