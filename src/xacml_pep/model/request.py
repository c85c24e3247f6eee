"""Request model and fluent builder.

A Request aggregates attribute categories plus a few evaluation flags.
Requests are frozen: the multi-decision predicate is derived from the
categories, so it cannot change after build().

Multi-decision rule:
    A request is a Multiple Decision Profile request when it carries
    MultiRequests, or when any one category type holds more than one
    instance. Shorthand members (AccessSubject, Resource, ...) and generic
    Category entries with the same CategoryId count as the same type.
"""

from __future__ import annotations

__all__ = [
    "MultiRequests",
    "Request",
    "RequestBuilder",
    "RequestReference",
]

import json
from collections import Counter
from typing import Any

from pydantic import ConfigDict, Field, model_validator

from xacml_pep.constants import (
    CATEGORY_ACCESS_SUBJECT,
    CATEGORY_ACTION,
    CATEGORY_ENVIRONMENT,
    CATEGORY_RESOURCE,
    CATEGORY_SHORTHANDS,
    REQUEST_MEMBER,
)
from xacml_pep.model.category import Category
from xacml_pep.model.common import OneOrMany, XacmlModel


class RequestReference(XacmlModel):
    """One individual decision request, as a list of category Ids."""

    reference_id: OneOrMany[str] = Field(alias="ReferenceId", min_length=1)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class MultiRequests(XacmlModel):
    """Explicit Multiple Decision Profile references."""

    request_reference: OneOrMany[RequestReference] = Field(alias="RequestReference", min_length=1)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# Request members holding category lists
_CATEGORY_MEMBERS: tuple[str, ...] = ("AccessSubject", "Action", "Resource", "Environment", "Category")


def canonical_category_id(category_id: str) -> str:
    """Map a JSON Profile shorthand name to its URN; URNs pass through."""
    return CATEGORY_SHORTHANDS.get(category_id, category_id)


class Request(XacmlModel):
    """XACML JSON decision request.

    Attributes:
        access_subject: AccessSubject categories.
        action: Action categories.
        resource: Resource categories.
        environment: Environment categories.
        category: Generic categories, each carrying its own CategoryId.
        return_policy_id_list: Ask the PDP to list applicable policies.
        combined_decision: Ask the PDP to combine multiple decisions into one.
        xpath_version: XPath version for attribute selectors.
        multi_requests: Explicit Multiple Decision Profile references.
    """

    access_subject: OneOrMany[Category] = Field(default=(), alias="AccessSubject")
    action: OneOrMany[Category] = Field(default=(), alias="Action")
    resource: OneOrMany[Category] = Field(default=(), alias="Resource")
    environment: OneOrMany[Category] = Field(default=(), alias="Environment")
    category: OneOrMany[Category] = Field(default=(), alias="Category")
    return_policy_id_list: bool = Field(default=False, alias="ReturnPolicyIdList")
    combined_decision: bool = Field(default=False, alias="CombinedDecision")
    xpath_version: str | None = Field(default=None, alias="XPathVersion")
    multi_requests: MultiRequests | None = Field(default=None, alias="MultiRequests")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="after")
    def _generic_categories_need_id(self) -> "Request":
        for index, category in enumerate(self.category):
            if category.category_id is None:
                raise ValueError(f"Category[{index}] must set CategoryId")
        return self

    def category_counts(self) -> Counter[str]:
        """Count category instances per category URN."""
        counts: Counter[str] = Counter()
        counts[CATEGORY_ACCESS_SUBJECT] += len(self.access_subject)
        counts[CATEGORY_ACTION] += len(self.action)
        counts[CATEGORY_RESOURCE] += len(self.resource)
        counts[CATEGORY_ENVIRONMENT] += len(self.environment)
        for category in self.category:
            assert category.category_id is not None  # Guaranteed by validator
            counts[canonical_category_id(category.category_id)] += 1
        return counts

    @property
    def is_multi_decision_profile_request(self) -> bool:
        """Check if this request asks for more than one decision.

        Returns:
            True if MultiRequests is present or any category type repeats.
        """
        if self.multi_requests is not None:
            return True
        return any(count > 1 for count in self.category_counts().values())

    def to_wire(self) -> dict[str, Any]:
        """Dump with JSON Profile member names, omitting empty category members."""
        data = super().to_wire()
        for member in _CATEGORY_MEMBERS:
            if not data.get(member):
                data.pop(member, None)
        return data

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON Profile envelope {"Request": {...}}."""
        return {REQUEST_MEMBER: self.to_wire()}

    def to_json(self, indent: int | None = None) -> str:
        """Encode the request envelope as JSON text."""
        return json.dumps(self.to_payload(), indent=indent)

    @classmethod
    def from_payload(cls, payload: Any) -> "Request":
        """Decode a JSON Profile envelope.

        Args:
            payload: Parsed JSON of the form {"Request": {...}}.

        Returns:
            The decoded Request.

        Raises:
            ValueError: If the envelope or its content is malformed.
        """
        if not isinstance(payload, dict) or REQUEST_MEMBER not in payload:
            raise ValueError(f"Expected a JSON object with a '{REQUEST_MEMBER}' member")
        return cls.model_validate(payload[REQUEST_MEMBER])

    @classmethod
    def from_json(cls, text: str | bytes) -> "Request":
        """Decode JSON text produced by to_json() or by another PEP."""
        return cls.from_payload(json.loads(text))


class RequestBuilder:
    """Fluent builder for Request.

    Usage:
        request = (
            RequestBuilder()
            .add_access_subject_category(Category().add("role", "user"))
            .add_resource_category(Category().add("objectId", "sbie"))
            .add_action_category(Category().add("actionId", "access"))
            .return_policy_id_list()
            .build()
        )
    """

    def __init__(self) -> None:
        self._access_subject: list[Category] = []
        self._action: list[Category] = []
        self._resource: list[Category] = []
        self._environment: list[Category] = []
        self._category: list[Category] = []
        self._return_policy_id_list = False
        self._combined_decision = False
        self._xpath_version: str | None = None
        self._multi_requests: MultiRequests | None = None

    def add_access_subject_category(self, category: Category) -> "RequestBuilder":
        self._access_subject.append(category)
        return self

    def add_action_category(self, category: Category) -> "RequestBuilder":
        self._action.append(category)
        return self

    def add_resource_category(self, category: Category) -> "RequestBuilder":
        self._resource.append(category)
        return self

    def add_environment_category(self, category: Category) -> "RequestBuilder":
        self._environment.append(category)
        return self

    def add_category(self, category: Category) -> "RequestBuilder":
        """Add a category of any type; it must carry its CategoryId."""
        if category.category_id is None:
            raise ValueError("Generic categories must set category_id")
        self._category.append(category)
        return self

    def return_policy_id_list(self, enabled: bool = True) -> "RequestBuilder":
        self._return_policy_id_list = enabled
        return self

    def combined_decision(self, enabled: bool = True) -> "RequestBuilder":
        self._combined_decision = enabled
        return self

    def xpath_version(self, version: str) -> "RequestBuilder":
        self._xpath_version = version
        return self

    def multi_requests(self, *references: list[str]) -> "RequestBuilder":
        """Reference categories by Id, one list per individual decision."""
        self._multi_requests = MultiRequests(
            request_reference=tuple(RequestReference(reference_id=tuple(ids)) for ids in references)
        )
        return self

    def build(self) -> Request:
        """Snapshot the builder into a frozen Request.

        Categories are deep copied, so later changes to the Category objects
        passed to this builder do not leak into the built request.
        """

        def snapshot(categories: list[Category]) -> tuple[Category, ...]:
            return tuple(c.model_copy(deep=True) for c in categories)

        return Request(
            access_subject=snapshot(self._access_subject),
            action=snapshot(self._action),
            resource=snapshot(self._resource),
            environment=snapshot(self._environment),
            category=snapshot(self._category),
            return_policy_id_list=self._return_policy_id_list,
            combined_decision=self._combined_decision,
            xpath_version=self._xpath_version,
            multi_requests=self._multi_requests,
        )
