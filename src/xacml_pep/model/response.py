"""Response models for the XACML JSON Profile.

Two wire shapes exist for the same information:

- JSON Profile 1.1: {"Response": [ {result}, ... ]}, always an array.
  Modeled by Response, the canonical type callers consume.
- JSON Profile 1.0: {"Response": {result}} or a one-element array.
  Modeled by SingleResponse, used only on the wire and promoted to
  Response by xacml_pep.reconcile.
"""

from __future__ import annotations

__all__ = [
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

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from xacml_pep.constants import RESPONSE_MEMBER
from xacml_pep.model.attribute import AttributeValue
from xacml_pep.model.category import Category
from xacml_pep.model.common import OneOrMany, XacmlModel


class Decision(str, Enum):
    """XACML decision outcome.

    Inherits from str for easy serialization and comparison.
    """

    PERMIT = "Permit"
    DENY = "Deny"
    NOT_APPLICABLE = "NotApplicable"
    INDETERMINATE = "Indeterminate"


class StatusCode(XacmlModel):
    """Status code URN, optionally refined by a nested code."""

    value: str = Field(alias="Value", min_length=1)
    status_code: StatusCode | None = Field(default=None, alias="StatusCode")


class Status(XacmlModel):
    """Evaluation status attached to a Result."""

    status_code: StatusCode | None = Field(default=None, alias="StatusCode")
    status_message: str | None = Field(default=None, alias="StatusMessage")
    status_detail: Any | None = Field(default=None, alias="StatusDetail")


class AttributeAssignment(XacmlModel):
    """Attribute value carried by an obligation or advice."""

    attribute_id: str = Field(alias="AttributeId", min_length=1)
    value: AttributeValue = Field(alias="Value")
    category: str | None = Field(default=None, alias="Category")
    data_type: str | None = Field(default=None, alias="DataType")
    issuer: str | None = Field(default=None, alias="Issuer")


class ObligationOrAdvice(XacmlModel):
    """Obligation or advice returned with a decision."""

    id: str = Field(alias="Id", min_length=1)
    attribute_assignment: OneOrMany[AttributeAssignment] = Field(default=(), alias="AttributeAssignment")


class IdReference(XacmlModel):
    """Reference to a policy or policy set that was applicable."""

    id: str = Field(alias="Id", min_length=1)
    version: str | None = Field(default=None, alias="Version")


class PolicyIdentifierList(XacmlModel):
    """Applicable policies, returned when ReturnPolicyIdList was requested."""

    policy_id_reference: OneOrMany[IdReference] = Field(default=(), alias="PolicyIdReference")
    policy_set_id_reference: OneOrMany[IdReference] = Field(default=(), alias="PolicySetIdReference")


class Result(XacmlModel):
    """One decision outcome.

    Members the client does not model are kept as extra fields so they
    survive decoding and re-encoding.

    Attributes:
        decision: Permit, Deny, NotApplicable or Indeterminate.
        status: Evaluation status (mostly set for Indeterminate).
        obligations: Obligations the PEP must discharge.
        associated_advice: Advice the PEP may act on.
        category: Attributes echoed because IncludeInResult was set.
        policy_identifier_list: Applicable policies.
    """

    decision: Decision = Field(alias="Decision")
    status: Status | None = Field(default=None, alias="Status")
    obligations: OneOrMany[ObligationOrAdvice] | None = Field(default=None, alias="Obligations")
    associated_advice: OneOrMany[ObligationOrAdvice] | None = Field(default=None, alias="AssociatedAdvice")
    category: OneOrMany[Category] | None = Field(default=None, alias="Category")
    policy_identifier_list: PolicyIdentifierList | None = Field(default=None, alias="PolicyIdentifierList")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def is_permit(self) -> bool:
        """Check if the decision is Permit."""
        return self.decision is Decision.PERMIT


class Response(XacmlModel):
    """Canonical response: a non-empty, ordered sequence of Results.

    This is the only response type PEP code should consume.
    """

    results: list[Result] = Field(alias=RESPONSE_MEMBER, min_length=1)

    @property
    def decisions(self) -> list[Decision]:
        """Decisions in result order."""
        return [r.decision for r in self.results]

    @property
    def first(self) -> Result:
        """First result; the only one for single-decision requests."""
        return self.results[0]


class SingleResponse(XacmlModel):
    """JSON Profile 1.0 response wrapping exactly one Result.

    The Response member may be the result object itself or an array
    holding exactly one result.
    """

    result: Result = Field(alias=RESPONSE_MEMBER)

    @field_validator("result", mode="before")
    @classmethod
    def _unwrap_single_element_array(cls, value: Any) -> Any:
        if isinstance(value, list):
            if len(value) != 1:
                raise ValueError(f"single-decision response must hold exactly one result, got {len(value)}")
            return value[0]
        return value
