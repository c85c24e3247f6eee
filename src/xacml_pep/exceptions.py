"""Custom exceptions for xacml-pep.

This module contains all custom exceptions used throughout the package.
Every exception derives from AuthZClientError so a PEP can catch the whole
family in one place, while the subclasses tell it precisely which layer failed:

Configuration (raised before any network activity):
    - ConfigurationError: Missing or invalid client configuration

Transport (the PDP could not be reached or the channel failed):
    - PDPConnectionError: Connection refused, DNS failure, reset
    - PDPTimeoutError: Connect or read timeout
    - SSLCertificateError: Server certificate rejected (strict trust)
    - SSLHandshakeError: Any other TLS failure

Protocol (the PDP answered with a non-2xx status):
    - PDPHTTPError: Generic non-2xx status
    - UnauthorizedError: 401, credentials rejected
    - ForbiddenError: 403, credentials accepted but not allowed

Deserialization (the PDP answered 2xx with an unusable body):
    - ResponseDeserializationError: Body is not a JSON Profile response
    - EmptyResponseError: Response carries no Result

None of these are retried or recovered by the client.

Usage:
    from xacml_pep.exceptions import TransportError, UnauthorizedError
"""

from __future__ import annotations

__all__ = [
    "AuthZClientError",
    "ConfigurationError",
    "EmptyResponseError",
    "ForbiddenError",
    "PDPConnectionError",
    "PDPHTTPError",
    "PDPTimeoutError",
    "ResponseDeserializationError",
    "SSLCertificateError",
    "SSLHandshakeError",
    "TLSError",
    "TransportError",
    "UnauthorizedError",
]


class AuthZClientError(Exception):
    """Base exception for all authorization client failures."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(AuthZClientError):
    """Client configuration is invalid or incomplete.

    Raised when:
    - No configuration is supplied to the client
    - Config file does not exist or contains invalid JSON
    - Config file fails Pydantic validation
    - Password is neither configured nor available from the OS keychain
    - TLS material (CA bundle, client certificate) is missing or unusable
    """


# =============================================================================
# Transport
# =============================================================================


class TransportError(AuthZClientError):
    """The request could not be delivered to the PDP.

    Attributes:
        url: PDP URL the request was sent to.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class PDPConnectionError(TransportError):
    """Connection to the PDP failed (refused, reset, name resolution)."""


class PDPTimeoutError(TransportError):
    """Connecting to or reading from the PDP timed out."""


class TLSError(TransportError):
    """Base for TLS failures on the PDP channel."""


class SSLCertificateError(TLSError):
    """The PDP's certificate failed verification.

    Only raised in strict trust mode. Configure a CA bundle that contains the
    PDP's issuer, or opt out with trust_all_certificates for development.
    """


class SSLHandshakeError(TLSError):
    """TLS handshake failed for a reason other than certificate verification.

    Typical causes are protocol mismatches and a rejected client certificate.
    """


# =============================================================================
# Protocol
# =============================================================================


class PDPHTTPError(AuthZClientError):
    """The PDP returned a non-2xx HTTP status.

    The body is kept for diagnostics but is never parsed as a decision.

    Attributes:
        status_code: HTTP status returned by the PDP.
        url: PDP URL the request was sent to.
        body: Response body text (may be empty).
    """

    def __init__(self, status_code: int, url: str, body: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"PDP returned HTTP {status_code} for {url}")

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(status_code={self.status_code!r}, url={self.url!r})"


class UnauthorizedError(PDPHTTPError):
    """The PDP rejected the Basic authentication credentials (HTTP 401)."""


class ForbiddenError(PDPHTTPError):
    """The PDP refused the authenticated client (HTTP 403)."""


# =============================================================================
# Deserialization
# =============================================================================


class ResponseDeserializationError(AuthZClientError):
    """The PDP response body does not match the XACML JSON Profile.

    Attributes:
        body: Offending response body (or a description of it).
    """

    def __init__(self, message: str, *, body: str | None = None) -> None:
        super().__init__(message)
        self.body = body


class EmptyResponseError(ResponseDeserializationError):
    """The PDP response carries no Result.

    Every authorization request yields at least one Result, so an empty
    response is treated as malformed rather than as "no decision".
    """
