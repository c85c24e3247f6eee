"""PDP transports.

Structure:
    protocol.py         - PDPTransport / AsyncPDPTransport protocols, ResponseVariant
    httpx_transport.py  - HttpxTransport and AsyncHttpxTransport (httpx backends)
    tls.py              - Per-client SSL context creation
    errors.py           - httpx failure -> client error mapping
"""

from xacml_pep.transport.httpx_transport import USER_AGENT, AsyncHttpxTransport, HttpxTransport
from xacml_pep.transport.protocol import AsyncPDPTransport, PDPTransport, ResponseVariant
from xacml_pep.transport.tls import create_ssl_context

__all__ = [
    "AsyncHttpxTransport",
    "AsyncPDPTransport",
    "HttpxTransport",
    "PDPTransport",
    "ResponseVariant",
    "USER_AGENT",
    "create_ssl_context",
]
