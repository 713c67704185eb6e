"""
Shared model configuration for label schemas.

All label models serialize to the camelCase JSON shape used by the editor
and by persisted tenant designs. Python code uses snake_case attribute
names; both spellings are accepted on input.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


Alignment = Literal["left", "center", "right"]
FontWeight = Literal["normal", "bold"]
FontFamily = Literal["Helvetica", "Courier", "Times-Roman"]


class LabelModel(BaseModel):
    """
    Base class for every persisted label model.

    - camelCase aliases on the wire
    - unknown attributes rejected
    - attribute assignment re-validated (editor mutates in place)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
    )


def enum_value(value: Any) -> Any:
    """Unwrap enum members so string identifiers are stored as plain str."""
    if isinstance(value, Enum):
        return value.value
    return value
