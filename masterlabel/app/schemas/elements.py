"""
Label element schemas.

Elements form a closed, discriminated union on ``type``. Each variant
carries only its own visual attributes; attributes belonging to another
variant are rejected at validation time.

Default values declared here are the documented defaults used by the
element factory, so a freshly created element is always complete.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator

from masterlabel.app.schemas.base import (
    Alignment,
    FontFamily,
    FontWeight,
    LabelModel,
    enum_value,
)
from masterlabel.app.schemas.fields import FieldKey


class ElementType(str, Enum):
    TEXT = "text"
    FIELD_VALUE = "field-value"
    QR_CODE = "qr-code"
    PICTOGRAM = "pictogram"
    COMPLIANCE_BADGE = "compliance-badge"
    IMAGE = "image"
    DIVIDER = "divider"
    SPACER = "spacer"
    MATERIAL_CODE = "material-code"
    BARCODE = "barcode"
    ICON_TEXT = "icon-text"
    PACKAGE_COUNTER = "package-counter"


PackageCounterFormat = Literal[
    "x-of-y",
    "x-slash-y",
    "package-x-of-y",
    "box-x-of-y",
    "parcel-x-of-y",
]


# ---------------------------------------------------------------------------
# Common base
# ---------------------------------------------------------------------------


class ElementBase(LabelModel):
    id: str = Field(..., min_length=1)
    section_id: str = Field(..., min_length=1)
    sort_order: int = 0

    @field_validator("section_id", mode="before")
    @classmethod
    def _plain_section_id(cls, v):
        return enum_value(v)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TextElement(ElementBase):
    type: Literal["text"] = "text"
    content: str = "Text"
    font_size: float = Field(7, gt=0)
    font_weight: FontWeight = "normal"
    color: str = "#1a1a1a"
    alignment: Alignment = "left"
    italic: bool = False
    uppercase: bool = False


class FieldValueElement(ElementBase):
    type: Literal["field-value"] = "field-value"
    field_key: FieldKey = FieldKey.PRODUCT_NAME
    show_label: bool = True
    label_text: Optional[str] = None
    font_size: float = Field(7, gt=0)
    font_weight: FontWeight = "bold"
    color: str = "#1a1a1a"
    label_color: str = "#6b7280"
    alignment: Alignment = "left"
    layout: Literal["inline", "stacked"] = "inline"
    line_height: Optional[float] = None
    italic: Optional[bool] = None
    uppercase: Optional[bool] = None
    margin_bottom: Optional[float] = None
    font_family: Optional[FontFamily] = None


class QRCodeElement(ElementBase):
    type: Literal["qr-code"] = "qr-code"
    size: float = Field(52, gt=0)
    show_label: bool = True
    label_text: str = "Digital Product Passport"
    show_url: bool = True
    alignment: Alignment = "left"


class PictogramElement(ElementBase):
    type: Literal["pictogram"] = "pictogram"
    pictogram_id: str = "ce-mark"
    source: Literal["builtin", "database"] = "builtin"
    size: float = Field(24, gt=0)
    color: str = "#1a1a1a"
    show_label: bool = False
    label_text: Optional[str] = None
    alignment: Alignment = "left"


class ComplianceBadgeElement(ElementBase):
    type: Literal["compliance-badge"] = "compliance-badge"
    badge_id: str = "ce"
    symbol: str = "CE"
    style: Literal["outlined", "filled", "minimal"] = "outlined"
    size: float = Field(7, gt=0)
    color: str = "#1a1a1a"
    background_color: str = "transparent"
    show_label: bool = False
    alignment: Alignment = "left"


class ImageElement(ElementBase):
    type: Literal["image"] = "image"
    src: str = ""
    alt: str = ""
    width: float = Field(50, ge=10, le=100, description="Percent of container width")
    alignment: Alignment = "center"
    border_radius: float = Field(0, ge=0)


class DividerElement(ElementBase):
    type: Literal["divider"] = "divider"
    color: str = "#d1d5db"
    thickness: float = Field(0.5, gt=0)
    style: Literal["solid", "dashed", "dotted"] = "solid"
    margin_top: float = 4
    margin_bottom: float = 4


class SpacerElement(ElementBase):
    type: Literal["spacer"] = "spacer"
    height: float = Field(8, ge=0)


class MaterialCodeElement(ElementBase):
    type: Literal["material-code"] = "material-code"
    codes: List[str] = Field(default_factory=list)
    auto_populate: bool = True
    font_size: float = Field(5.5, gt=0)
    color: str = "#1a1a1a"
    border_color: str = "#9ca3af"
    alignment: Alignment = "left"


class BarcodeElement(ElementBase):
    type: Literal["barcode"] = "barcode"
    format: Literal["ean13", "code128", "code39"] = "ean13"
    value: str = ""
    auto_populate: bool = True
    height: float = Field(30, gt=0)
    show_text: bool = True
    alignment: Alignment = "center"


class IconTextElement(ElementBase):
    type: Literal["icon-text"] = "icon-text"
    icon: str = "Info"
    text: str = "Label text"
    font_size: float = Field(6, gt=0)
    color: str = "#374151"
    icon_size: float = Field(8, gt=0)
    alignment: Alignment = "left"


class PackageCounterElement(ElementBase):
    type: Literal["package-counter"] = "package-counter"
    format: PackageCounterFormat = "package-x-of-y"
    font_size: float = Field(11, gt=0)
    font_weight: FontWeight = "bold"
    color: str = "#1a1a1a"
    background_color: str = "#f3f4f6"
    border_color: str = "#9ca3af"
    border_width: float = Field(1, ge=0)
    border_radius: float = Field(4, ge=0)
    padding: float = Field(6, ge=0)
    alignment: Alignment = "center"
    show_border: bool = True
    show_background: bool = True
    uppercase: bool = False
    font_family: Optional[FontFamily] = None


LabelElement = Annotated[
    Union[
        TextElement,
        FieldValueElement,
        QRCodeElement,
        PictogramElement,
        ComplianceBadgeElement,
        ImageElement,
        DividerElement,
        SpacerElement,
        MaterialCodeElement,
        BarcodeElement,
        IconTextElement,
        PackageCounterElement,
    ],
    Field(discriminator="type"),
]

ELEMENT_CLASSES = {
    ElementType.TEXT: TextElement,
    ElementType.FIELD_VALUE: FieldValueElement,
    ElementType.QR_CODE: QRCodeElement,
    ElementType.PICTOGRAM: PictogramElement,
    ElementType.COMPLIANCE_BADGE: ComplianceBadgeElement,
    ElementType.IMAGE: ImageElement,
    ElementType.DIVIDER: DividerElement,
    ElementType.SPACER: SpacerElement,
    ElementType.MATERIAL_CODE: MaterialCodeElement,
    ElementType.BARCODE: BarcodeElement,
    ElementType.ICON_TEXT: IconTextElement,
    ElementType.PACKAGE_COUNTER: PackageCounterElement,
}

element_adapter: TypeAdapter[LabelElement] = TypeAdapter(LabelElement)


def has_font_size(element: ElementBase) -> bool:
    """True for variants that carry a text ``font_size`` attribute."""
    return isinstance(getattr(element, "font_size", None), (int, float))
