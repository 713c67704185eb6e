"""
Product/batch input and resolved record schemas.

``ProductInput``, ``BatchInput`` and ``PartyInput`` describe the data a
tenant has on file for one product and one of its batches. The assembler
flattens them into a ``LabelRecord``: the flat field-key -> value lookup
consumed by auto-populated elements at render time.
"""

from typing import Dict, List, Literal, Optional

from pydantic import Field

from masterlabel.app.schemas.base import LabelModel


ProductGroup = Literal["electronics", "textiles", "toys", "household", "general"]
LabelVariant = Literal["b2b", "b2c"]


class MaterialInput(LabelModel):
    name: str
    percentage: float = Field(0, ge=0, le=100)
    recyclable: bool = False
    origin: Optional[str] = None
    type: Literal["product", "packaging"] = "product"


class CertificationInput(LabelModel):
    name: str
    issued_by: str = ""
    valid_until: Optional[str] = None


class RecyclabilityInput(LabelModel):
    recyclable_percentage: float = Field(0, ge=0, le=100)
    instructions: str = ""
    disposal_methods: List[str] = Field(default_factory=list)
    packaging_instructions: Optional[str] = None


class PartyInput(LabelModel):
    """Manufacturer or importer (supplier master data)."""

    name: str
    address: Optional[str] = None
    address_line2: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    vat: Optional[str] = None
    eori: Optional[str] = None
    website: Optional[str] = None
    contact: Optional[str] = None


class ProductInput(LabelModel):
    name: str
    gtin: str = ""
    category: str = ""
    batch_number: Optional[str] = None
    manufacturer: str = ""
    manufacturer_address: Optional[str] = None
    country_of_origin: Optional[str] = None
    hs_code: Optional[str] = None
    gross_weight: Optional[float] = Field(None, ge=0, description="Grams")
    net_weight: Optional[float] = Field(None, ge=0, description="Grams")
    materials: List[MaterialInput] = Field(default_factory=list)
    certifications: List[CertificationInput] = Field(default_factory=list)
    recyclability: Optional[RecyclabilityInput] = None
    registrations: Dict[str, str] = Field(default_factory=dict)
    unique_product_id: Optional[str] = None
    recycled_content_percentage: Optional[float] = None
    durability_years: Optional[float] = None
    repairability_score: Optional[float] = None
    dpp_registry_id: Optional[str] = None
    safety_information: Optional[str] = None


class BatchInput(LabelModel):
    serial_number: str
    batch_number: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    gross_weight: Optional[float] = Field(None, ge=0, description="Grams")
    net_weight: Optional[float] = Field(None, ge=0, description="Grams")
    production_date: Optional[str] = None
    materials_override: Optional[List[MaterialInput]] = None
    certifications_override: Optional[List[CertificationInput]] = None
    recyclability_override: Optional[RecyclabilityInput] = None


class LabelRecord(LabelModel):
    """
    Resolved data for one product + batch, keyed by field catalog keys.

    Values are kept as raw scalars; formatting (weights, numbers) happens
    in the resolver according to the field catalog.
    """

    values: Dict[str, str | int | float | None] = Field(default_factory=dict)
    material_codes: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    dpp_url: str = ""
    product_group: ProductGroup = "general"
    manufacturer_country: Optional[str] = None
