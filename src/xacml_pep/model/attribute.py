"""Attribute model - one id/value pair inside a category."""

from __future__ import annotations

__all__ = [
    "Attribute",
    "AttributeValue",
]

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from xacml_pep.model.common import XacmlModel

Scalar = str | bool | int | float
AttributeValue = Scalar | list[Scalar] | dict[str, Any]


class Attribute(XacmlModel):
    """XACML attribute (e.g. role = "user").

    The JSON Profile infers DataType from the JSON type of Value when
    data_type is not given.

    Attributes:
        attribute_id: Attribute identifier (AttributeId).
        value: Scalar value, bag of values, or structured object such as an
            XPathExpression (Value).
        issuer: Optional issuer of the attribute (Issuer).
        data_type: Optional XACML data type URI or shorthand (DataType).
        include_in_result: Ask the PDP to echo this attribute (IncludeInResult).
    """

    attribute_id: str = Field(alias="AttributeId", min_length=1)
    value: AttributeValue = Field(alias="Value")
    issuer: str | None = Field(default=None, alias="Issuer")
    data_type: str | None = Field(default=None, alias="DataType")
    include_in_result: bool | None = Field(default=None, alias="IncludeInResult")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("value")
    @classmethod
    def _value_not_empty(cls, value: AttributeValue) -> AttributeValue:
        if value == "" or value == [] or value == {}:
            raise ValueError("attribute value must not be empty")
        return value
