"""XACML JSON Profile data model.

Structure:
    common.py     - Shared base model and object-or-array decoding
    attribute.py  - Attribute (id/value pair)
    category.py   - Category (collection of attributes)
    request.py    - Request, RequestBuilder, MultiRequests
    response.py   - Decision, Result, Response, SingleResponse

All models are transient: created per call, never persisted.
"""

from xacml_pep.model.attribute import Attribute, AttributeValue
from xacml_pep.model.category import Category
from xacml_pep.model.request import MultiRequests, Request, RequestBuilder, RequestReference
from xacml_pep.model.response import (
    AttributeAssignment,
    Decision,
    IdReference,
    ObligationOrAdvice,
    PolicyIdentifierList,
    Response,
    Result,
    SingleResponse,
    Status,
    StatusCode,
)

__all__ = [
    # Request side
    "Attribute",
    "AttributeValue",
    "Category",
    "MultiRequests",
    "Request",
    "RequestBuilder",
    "RequestReference",
    # Response side
    "AttributeAssignment",
    "Decision",
    "IdReference",
    "ObligationOrAdvice",
    "PolicyIdentifierList",
    "Response",
    "Result",
    "SingleResponse",
    "Status",
    "StatusCode",
]
