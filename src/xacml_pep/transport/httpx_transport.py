"""httpx-based PDP transports (sync and async).

Both backends POST the serialized request to the configured PDP URL with:
- Content-Type and Accept: application/xacml+json
- HTTP Basic authentication
- a per-client SSL context (see tls.py)
- explicit connect/read timeouts
- wire logging through httpx event hooks (see telemetry/wire_logger.py)

Failures are mapped onto the client error taxonomy (see errors.py) and
never retried.
"""

from __future__ import annotations

__all__ = [
    "AsyncHttpxTransport",
    "HttpxTransport",
    "USER_AGENT",
    "build_client_options",
]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from xacml_pep import __version__
from xacml_pep.constants import APP_NAME, XACML_JSON_MEDIA_TYPE
from xacml_pep.model.response import Response
from xacml_pep.telemetry.wire_logger import WireLogHooks
from xacml_pep.transport.errors import decode_pdp_response, translate_request_error
from xacml_pep.transport.protocol import ResponseVariant
from xacml_pep.transport.tls import create_ssl_context

if TYPE_CHECKING:
    import ssl

    from xacml_pep.config import ClientConfiguration
    from xacml_pep.model.request import Request
    from xacml_pep.reconcile import PDPPayload

# User-Agent header for PDP calls (informational, not security)
USER_AGENT = f"{APP_NAME}/{__version__}"

logger = logging.getLogger(__name__)


def build_client_options(
    configuration: "ClientConfiguration",
    ssl_context: "ssl.SSLContext | None" = None,
) -> dict[str, Any]:
    """Build the keyword arguments shared by httpx.Client and httpx.AsyncClient.

    Args:
        configuration: Client configuration.
        ssl_context: Pre-built SSL context. Built from configuration.tls when
            omitted and the PDP URL is HTTPS.

    Returns:
        Dict with auth, headers, timeout and verify.

    Raises:
        ConfigurationError: If the password or TLS material cannot be loaded.
    """
    if ssl_context is None and configuration.is_https:
        ssl_context = create_ssl_context(configuration.tls)

    return {
        "auth": httpx.BasicAuth(configuration.username, configuration.resolve_password()),
        "headers": {
            "Content-Type": XACML_JSON_MEDIA_TYPE,
            "Accept": XACML_JSON_MEDIA_TYPE,
            "User-Agent": USER_AGENT,
        },
        "timeout": httpx.Timeout(
            configuration.timeouts.read_seconds,
            connect=configuration.timeouts.connect_seconds,
        ),
        "verify": ssl_context if ssl_context is not None else True,
    }


def _log_payload_shape(variant: ResponseVariant, payload: "PDPPayload") -> None:
    expected_multi = variant is ResponseVariant.MULTI_DECISION
    got_multi = isinstance(payload, Response)
    if expected_multi != got_multi:
        logger.debug(
            "PDP answered the %s call with a %s body",
            variant.value,
            "multi-result" if got_multi else "single-result",
        )


class HttpxTransport:
    """Synchronous PDP transport over httpx.Client.

    One httpx.Client (and connection pool) per transport. httpx.Client is
    safe to share between threads, so one transport may serve concurrent
    authorization calls.

    Usage:
        transport = HttpxTransport(config)
        payload = transport.send(request, ResponseVariant.for_request(request))
        transport.close()
    """

    def __init__(
        self,
        configuration: "ClientConfiguration",
        *,
        ssl_context: "ssl.SSLContext | None" = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            configuration: Client configuration.
            ssl_context: Optional caller-supplied SSL context.
            http_transport: Optional httpx transport (e.g. httpx.MockTransport).

        Raises:
            ConfigurationError: If the password or TLS material cannot be loaded.
        """
        self._url = configuration.pdp_url
        hooks = WireLogHooks(include_payloads=configuration.logging.include_payloads)
        self._client = httpx.Client(
            **build_client_options(configuration, ssl_context),
            event_hooks=hooks.sync_hooks(),
            transport=http_transport,
        )

    @property
    def url(self) -> str:
        return self._url

    def send(self, request: "Request", variant: ResponseVariant) -> "PDPPayload":
        """POST the request to the PDP and decode the response body.

        Raises:
            TransportError: Connection, timeout or TLS failure.
            PDPHTTPError: Non-2xx status.
            ResponseDeserializationError: Body is undecodable or not a JSON Profile response.
        """
        logger.debug("Sending %s request to PDP %s", variant.value, self._url)
        try:
            response = self._client.post(self._url, content=request.to_json())
        except httpx.RequestError as e:
            raise translate_request_error(e, self._url) from e

        payload = decode_pdp_response(response)
        _log_payload_shape(variant, payload)
        return payload

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncHttpxTransport:
    """Asynchronous PDP transport over httpx.AsyncClient.

    Usage:
        async with AsyncHttpxTransport(config) as transport:
            payload = await transport.send(request, ResponseVariant.for_request(request))
    """

    def __init__(
        self,
        configuration: "ClientConfiguration",
        *,
        ssl_context: "ssl.SSLContext | None" = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            configuration: Client configuration.
            ssl_context: Optional caller-supplied SSL context.
            http_transport: Optional httpx async transport (e.g. httpx.MockTransport).

        Raises:
            ConfigurationError: If the password or TLS material cannot be loaded.
        """
        self._url = configuration.pdp_url
        hooks = WireLogHooks(include_payloads=configuration.logging.include_payloads)
        self._client = httpx.AsyncClient(
            **build_client_options(configuration, ssl_context),
            event_hooks=hooks.async_hooks(),
            transport=http_transport,
        )

    @property
    def url(self) -> str:
        return self._url

    async def send(self, request: "Request", variant: ResponseVariant) -> "PDPPayload":
        """POST the request to the PDP and decode the response body.

        Raises:
            TransportError: Connection, timeout or TLS failure.
            PDPHTTPError: Non-2xx status.
            ResponseDeserializationError: Body is undecodable or not a JSON Profile response.
        """
        logger.debug("Sending %s request to PDP %s", variant.value, self._url)
        try:
            response = await self._client.post(self._url, content=request.to_json())
        except httpx.RequestError as e:
            raise translate_request_error(e, self._url) from e

        payload = decode_pdp_response(response)
        _log_payload_shape(variant, payload)
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
