"""Shared building blocks for XACML JSON Profile models.

JSON Profile 1.0 lets most array-valued members be sent as a single object;
1.1 always uses arrays. Models here decode both and always encode arrays.
"""

from __future__ import annotations

__all__ = [
    "OneOrMany",
    "XacmlModel",
    "as_list",
]

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

T = TypeVar("T")


def as_list(value: Any) -> Any:
    """Wrap a lone JSON object in a list; leave lists and None alone."""
    if value is None or isinstance(value, (list, tuple)):
        return value
    return [value]


# Sequence member that also accepts a single object on decode
OneOrMany = Annotated[tuple[T, ...], BeforeValidator(as_list)]


class XacmlModel(BaseModel):
    """Base model using JSON Profile member names as aliases.

    Python code uses snake_case field names; serialization with
    by_alias=True produces the wire names.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump with JSON Profile member names, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
