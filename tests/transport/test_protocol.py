"""Tests for ResponseVariant routing and the error hierarchy."""

from xacml_pep.exceptions import (
    AuthZClientError,
    EmptyResponseError,
    ForbiddenError,
    PDPHTTPError,
    ResponseDeserializationError,
    SSLCertificateError,
    TLSError,
    TransportError,
    UnauthorizedError,
)
from xacml_pep.model import Request
from xacml_pep.transport import ResponseVariant


class TestResponseVariant:
    """Tests for choosing the expected response shape."""

    def test_single_request(self, single_request: Request) -> None:
        assert ResponseVariant.for_request(single_request) is ResponseVariant.SINGLE_DECISION

    def test_multi_request(self, multi_request: Request) -> None:
        assert ResponseVariant.for_request(multi_request) is ResponseVariant.MULTI_DECISION

    def test_values(self) -> None:
        assert ResponseVariant.MULTI_DECISION.value == "multi-decision"
        assert ResponseVariant.SINGLE_DECISION.value == "single-decision"


class TestErrorHierarchy:
    """Callers can catch at any layer of the taxonomy."""

    def test_everything_is_a_client_error(self) -> None:
        for error_type in (TransportError, PDPHTTPError, ResponseDeserializationError):
            assert issubclass(error_type, AuthZClientError)

    def test_layers(self) -> None:
        assert issubclass(SSLCertificateError, TLSError)
        assert issubclass(TLSError, TransportError)
        assert issubclass(UnauthorizedError, PDPHTTPError)
        assert issubclass(ForbiddenError, PDPHTTPError)
        assert issubclass(EmptyResponseError, ResponseDeserializationError)
        assert not issubclass(PDPHTTPError, TransportError)

    def test_http_error_details(self) -> None:
        error = ForbiddenError(403, "https://pdp.example.com", body="no")

        assert str(error) == "PDP returned HTTP 403 for https://pdp.example.com"
        assert error.body == "no"
        assert repr(error) == "ForbiddenError(status_code=403, url='https://pdp.example.com')"
