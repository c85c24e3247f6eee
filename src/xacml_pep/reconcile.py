"""Response reconciliation between JSON Profile 1.0 and 1.1.

The PDP may answer in either historical shape:

- 1.1: {"Response": [ {result}, ... ]}     -> Response
- 1.0: {"Response": {result}} or [ {result} ] -> SingleResponse

decode_payload() picks the shape from the body itself (canonical shape
first, single shape as fallback), so a request whose multi-decision flag
disagrees with what the PDP actually sent still decodes. reconcile() then
promotes a SingleResponse into the canonical Response.

Both functions are pure; transport failures never reach them.
"""

from __future__ import annotations

__all__ = [
    "PDPPayload",
    "decode_payload",
    "reconcile",
]

import logging
from typing import Any, Union

from pydantic import ValidationError

from xacml_pep.constants import RESPONSE_MEMBER
from xacml_pep.exceptions import EmptyResponseError, ResponseDeserializationError
from xacml_pep.model.request import Request
from xacml_pep.model.response import Response, SingleResponse
from xacml_pep.utils.file_helpers import format_validation_errors

logger = logging.getLogger(__name__)

# What a transport hands back for one call
PDPPayload = Union[Response, SingleResponse]


def decode_payload(data: Any) -> PDPPayload:
    """Decode a parsed PDP response body into Response or SingleResponse.

    Args:
        data: Parsed JSON body.

    Returns:
        Response for the array shape, SingleResponse for the object shape.

    Raises:
        EmptyResponseError: If the Response member is missing or empty.
        ResponseDeserializationError: If neither shape matches.
    """
    if not isinstance(data, dict):
        raise ResponseDeserializationError(
            f"Expected a JSON object with a '{RESPONSE_MEMBER}' member, got {type(data).__name__}"
        )
    member = data.get(RESPONSE_MEMBER)
    if member is None or member == [] or member == {}:
        raise EmptyResponseError(f"PDP response has no '{RESPONSE_MEMBER}' results")

    try:
        return Response.model_validate(data)
    except ValidationError as multi_error:
        logger.debug("Body is not a multi-result response, trying single-result shape: %s", multi_error)
        try:
            return SingleResponse.model_validate(data)
        except ValidationError as single_error:
            raise ResponseDeserializationError(
                "PDP response does not match the XACML JSON Profile:\n"
                + format_validation_errors(single_error)
            ) from single_error


def reconcile(request: Request, payload: PDPPayload) -> Response:
    """Normalize a transport payload into the canonical Response.

    Args:
        request: The request the payload answers. Only its multi-decision
            predicate is consulted, and only for diagnostics.
        payload: Response (returned unchanged) or SingleResponse (its Result
            is promoted into a one-element Response).

    Returns:
        Response with at least one Result.

    Raises:
        EmptyResponseError: If the payload carries no Result.
        TypeError: If payload is neither Response nor SingleResponse.
    """
    if isinstance(payload, Response):
        if not payload.results:
            raise EmptyResponseError(f"PDP response has no '{RESPONSE_MEMBER}' results")
        return payload

    if isinstance(payload, SingleResponse):
        if payload.result is None:
            raise EmptyResponseError(f"PDP response has no '{RESPONSE_MEMBER}' results")
        if request.is_multi_decision_profile_request:
            logger.debug("Multi-decision request answered with a single result; promoting it")
        return Response(results=[payload.result])

    raise TypeError(f"Cannot reconcile payload of type {type(payload).__name__}")
