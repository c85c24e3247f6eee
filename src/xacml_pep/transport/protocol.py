"""Protocol definition for pluggable PDP transports.

Defines the interface every transport backend implements, so the HTTP
client library can be swapped at configuration time. Backends implement
this protocol structurally; they do not inherit from anything here.

Example alternative backend:

    class RecordedTransport:
        def __init__(self, payload: PDPPayload) -> None:
            self._payload = payload

        def send(self, request: Request, variant: ResponseVariant) -> PDPPayload:
            return self._payload

        def close(self) -> None:
            pass
"""

from __future__ import annotations

__all__ = [
    "AsyncPDPTransport",
    "PDPTransport",
    "ResponseVariant",
]

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from xacml_pep.model.request import Request
    from xacml_pep.reconcile import PDPPayload


class ResponseVariant(str, Enum):
    """Which logical PDP call is being made.

    Attributes:
        MULTI_DECISION: Expects the array-of-results shape (JSON Profile 1.1).
        SINGLE_DECISION: Expects the object-or-array shape (JSON Profile 1.0).
    """

    MULTI_DECISION = "multi-decision"
    SINGLE_DECISION = "single-decision"

    @classmethod
    def for_request(cls, request: "Request") -> "ResponseVariant":
        """Route a request by its multi-decision predicate."""
        if request.is_multi_decision_profile_request:
            return cls.MULTI_DECISION
        return cls.SINGLE_DECISION


@runtime_checkable
class PDPTransport(Protocol):
    """Synchronous transport to a Policy Decision Point.

    Implementations:
    - Serialize the request and deliver it to the PDP.
    - Return the decoded body as Response or SingleResponse.
    - Raise TransportError, PDPHTTPError or ResponseDeserializationError
      subclasses on failure, without retrying.
    """

    def send(self, request: "Request", variant: ResponseVariant) -> "PDPPayload":
        """Send one authorization request.

        Args:
            request: The request to serialize and send.
            variant: Which logical call this is (routing chosen by the caller).

        Returns:
            Response or SingleResponse as decoded from the PDP's body.
        """
        ...

    def close(self) -> None:
        """Release connections held by the transport."""
        ...


@runtime_checkable
class AsyncPDPTransport(Protocol):
    """Asynchronous counterpart of PDPTransport."""

    async def send(self, request: "Request", variant: ResponseVariant) -> "PDPPayload":
        """Send one authorization request (see PDPTransport.send)."""
        ...

    async def aclose(self) -> None:
        """Release connections held by the transport."""
        ...
