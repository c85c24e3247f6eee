"""Mapping of httpx outcomes onto the client error taxonomy.

Shared by the sync and async httpx backends so both report failures
identically:

- httpx.TimeoutException        -> PDPTimeoutError
- TLS failure, cert verification -> SSLCertificateError
- TLS failure, anything else     -> SSLHandshakeError
- other httpx.TransportError     -> PDPConnectionError
- httpx.DecodingError (corrupt Content-Encoding) -> ResponseDeserializationError
- any other httpx.RequestError   -> PDPConnectionError
- 401 / 403 / other non-2xx      -> UnauthorizedError / ForbiddenError / PDPHTTPError
- unparseable or wrong-shape body -> ResponseDeserializationError
"""

from __future__ import annotations

__all__ = [
    "decode_pdp_response",
    "raise_for_pdp_status",
    "translate_request_error",
]

import ssl

import httpx

from xacml_pep.constants import MAX_LOGGED_BODY_CHARS
from xacml_pep.exceptions import (
    AuthZClientError,
    ForbiddenError,
    PDPConnectionError,
    PDPHTTPError,
    PDPTimeoutError,
    ResponseDeserializationError,
    SSLCertificateError,
    SSLHandshakeError,
    UnauthorizedError,
)
from xacml_pep.reconcile import PDPPayload, decode_payload

# String indicators for TLS failures when the ssl exception is not chained
_CERT_VERIFY_INDICATORS: tuple[str, ...] = (
    "certificate_verify_failed",
    "certificate verify failed",
    "hostname mismatch",
)
_TLS_INDICATORS: tuple[str, ...] = ("ssl", "tls", "handshake")


def _find_ssl_error(error: BaseException) -> ssl.SSLError | None:
    """Walk the exception chain looking for the underlying ssl error."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


def translate_request_error(error: httpx.RequestError, url: str) -> AuthZClientError:
    """Classify an httpx failure raised while sending or reading the body.

    Args:
        error: Exception raised by httpx during the call.
        url: PDP URL, for the message.

    Returns:
        ResponseDeserializationError for undecodable bodies, otherwise the
        matching TransportError subclass (the caller raises it).
    """
    if isinstance(error, httpx.DecodingError):
        return ResponseDeserializationError(f"PDP response body could not be decoded: {error}")
    if not isinstance(error, httpx.TransportError):
        return PDPConnectionError(f"PDP request failed: {url} ({type(error).__name__}: {error})", url=url)

    if isinstance(error, httpx.TimeoutException):
        return PDPTimeoutError(f"Request to PDP timed out: {url} ({type(error).__name__})", url=url)

    ssl_error = _find_ssl_error(error)
    message = str(error).lower()

    if isinstance(ssl_error, ssl.SSLCertVerificationError) or any(i in message for i in _CERT_VERIFY_INDICATORS):
        return SSLCertificateError(
            f"SSL certificate verification failed for {url}: {error}. "
            "Configure a CA bundle that trusts the PDP, or trust_all_certificates for development.",
            url=url,
        )
    if ssl_error is not None or any(i in message for i in _TLS_INDICATORS):
        return SSLHandshakeError(f"SSL handshake failed for {url}: {error}", url=url)

    return PDPConnectionError(f"PDP unreachable: {url} ({type(error).__name__}: {error})", url=url)


def raise_for_pdp_status(response: httpx.Response) -> None:
    """Raise the protocol error matching a non-2xx status.

    Args:
        response: A response whose body has been read.

    Raises:
        UnauthorizedError: On 401.
        ForbiddenError: On 403.
        PDPHTTPError: On any other non-2xx status.
    """
    if response.is_success:
        return

    url = str(response.request.url)
    body = response.text[:MAX_LOGGED_BODY_CHARS]
    if response.status_code == 401:
        raise UnauthorizedError(response.status_code, url, body)
    if response.status_code == 403:
        raise ForbiddenError(response.status_code, url, body)
    raise PDPHTTPError(response.status_code, url, body)


def decode_pdp_response(response: httpx.Response) -> PDPPayload:
    """Check the status and decode the JSON Profile body.

    Args:
        response: A response whose body has been read.

    Returns:
        Response or SingleResponse.

    Raises:
        PDPHTTPError: On non-2xx status.
        ResponseDeserializationError: If the body is not JSON or not a JSON
            Profile response.
    """
    raise_for_pdp_status(response)
    try:
        data = response.json()
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueError
        raise ResponseDeserializationError(
            f"PDP response is not valid JSON: {e}",
            body=response.text[:MAX_LOGGED_BODY_CHARS],
        ) from e
    return decode_payload(data)
