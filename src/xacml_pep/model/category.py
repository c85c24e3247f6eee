"""Category model - a named collection of attributes.

A category is the unit a request is assembled from: one access subject,
one resource, one action, and so on. Categories are mutable while they are
being filled; RequestBuilder.build() snapshots them into the frozen Request.
"""

from __future__ import annotations

__all__ = ["Category"]

from typing import Any

from pydantic import Field

from xacml_pep.model.attribute import Attribute, AttributeValue
from xacml_pep.model.common import OneOrMany, XacmlModel


class Category(XacmlModel):
    """Attribute category.

    Attributes:
        category_id: Category URN or shorthand (CategoryId). Optional in the
            shorthand members (AccessSubject, Resource, ...), required for
            entries of the generic Category member.
        id: Identifier referenced by MultiRequests (Id).
        content: Inline XML or JSON content (Content).
        attributes: Attributes in this category (Attribute).
    """

    category_id: str | None = Field(default=None, alias="CategoryId", min_length=1)
    id: str | None = Field(default=None, alias="Id", min_length=1)
    content: str | None = Field(default=None, alias="Content")
    attributes: OneOrMany[Attribute] = Field(default=(), alias="Attribute")

    def add_attribute(self, attribute: Attribute) -> "Category":
        """Append an attribute and return this category for chaining."""
        self.attributes = (*self.attributes, attribute)
        return self

    def add(self, attribute_id: str, value: AttributeValue, **kwargs: Any) -> "Category":
        """Build an Attribute from id/value and append it.

        Args:
            attribute_id: Attribute identifier.
            value: Attribute value.
            **kwargs: Optional Attribute fields (issuer, data_type, include_in_result).

        Returns:
            This category, for chaining.
        """
        return self.add_attribute(Attribute(attribute_id=attribute_id, value=value, **kwargs))

    def get_values(self, attribute_id: str) -> list[AttributeValue]:
        """Return the values of every attribute with the given id."""
        return [a.value for a in self.attributes if a.attribute_id == attribute_id]
