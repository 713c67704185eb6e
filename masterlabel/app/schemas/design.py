"""
Label design document and template schemas.

A ``LabelDesign`` is the complete, serializable description of one printable
label: page geometry, typography defaults, ordered sections and a flat list
of elements, each tagged with its owning section and a sort order.

A ``LabelTemplate`` bundles a design with catalogue metadata. Templates are
immutable presets; their designs must be deep-copied before editing.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import ConfigDict, Field, model_validator

from masterlabel.app.schemas.base import FontFamily, LabelModel
from masterlabel.app.schemas.elements import LabelElement
from masterlabel.app.schemas.sections import LabelSection


DESIGN_FORMAT_VERSION = 2


class TemplateCategory(str, Enum):
    ELECTRONICS = "electronics"
    TEXTILES = "textiles"
    TOYS = "toys"
    HOUSEHOLD = "household"
    GENERAL = "general"
    LOGISTICS = "logistics"
    CUSTOM = "custom"


TemplateVariant = Literal["b2b", "b2c", "universal"]


class LabelDesign(LabelModel):
    """
    Full label design document.

    Invariants (checked on construction and on attribute assignment):
    - every element references a section present in the document
    - element ids are unique
    - section ids are unique
    """

    version: int = Field(
        DESIGN_FORMAT_VERSION,
        alias="_version",
        ge=1,
        le=DESIGN_FORMAT_VERSION,
        description="Persisted format version, used for forward migrations",
    )
    page_size: Literal["A6", "A7", "custom"] = "A6"
    page_width: float = Field(..., gt=0, description="Page width in points")
    page_height: float = Field(..., gt=0, description="Page height in points")
    padding: float = Field(..., ge=0, description="Page margin in points")
    background_color: str = "#ffffff"
    font_family: FontFamily = "Helvetica"
    base_font_size: float = Field(..., gt=0)
    base_text_color: str = "#1a1a1a"
    sections: List[LabelSection] = Field(default_factory=list)
    elements: List[LabelElement] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "LabelDesign":
        section_ids = [s.id for s in self.sections]
        if len(set(section_ids)) != len(section_ids):
            raise ValueError(f"Duplicate section ids in design: {section_ids}")

        known = set(section_ids)
        seen_ids = set()
        for element in self.elements:
            if element.section_id not in known:
                raise ValueError(
                    f"Element '{element.id}' references unknown section "
                    f"'{element.section_id}'"
                )
            if element.id in seen_ids:
                raise ValueError(f"Duplicate element id '{element.id}'")
            seen_ids.add(element.id)

        return self


class LabelTemplate(LabelModel):
    id: str
    name: str
    description: str
    category: TemplateCategory
    variant: TemplateVariant = "universal"
    thumbnail: Optional[str] = None
    design: LabelDesign
    is_default: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)
