"""
Label section schema.

Sections are named, orderable containers that group elements and control
visual separation (padding, border). The six canonical sections have fixed
identifiers; templates and users may add custom zones with arbitrary ids.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from masterlabel.app.schemas.base import LabelModel, enum_value


class SectionId(str, Enum):
    IDENTITY = "identity"
    DPP = "dpp"
    COMPLIANCE = "compliance"
    SUSTAINABILITY = "sustainability"
    CUSTOM = "custom"
    FOOTER = "footer"


class LabelSection(LabelModel):
    """
    One section of a label design.

    ``sort_order`` defines vertical rendering order. A hidden section keeps
    its elements in the model; they are simply not rendered.
    """

    id: str = Field(..., min_length=1)
    label: str = Field(..., description="i18n key of the section title")
    visible: bool = True
    collapsed: bool = False
    sort_order: int = 0
    padding_top: float = Field(0, ge=0)
    padding_bottom: float = Field(6, ge=0)
    show_border: bool = False
    border_color: str = "#d1d5db"
    background_color: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _plain_section_id(cls, v):
        return enum_value(v)
