"""
Label record assembly.

Flattens product, batch and supplier master data into a ``LabelRecord``:
the field-key -> value lookup consumed by auto-populated elements.

Batch data wins over product data wherever both carry a value
(batch number, weights, materials, certifications).
Supplier records, when present, win over the free-text manufacturer
fields on the product. A supplier without a street address keeps the
product's manufacturer address.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from masterlabel.app.schemas.fields import FieldKey
from masterlabel.app.schemas.record import (
    BatchInput,
    LabelRecord,
    MaterialInput,
    PartyInput,
    ProductInput,
)
from masterlabel.app.services.product_group import detect_product_group


ResolverFormat = Literal["default", "gs1"]

# Substring of a packaging material name -> recycling code.
# First matching entry wins, so longer phrases precede their substrings.
PACKAGING_MATERIAL_CODES: Dict[str, str] = {
    "corrugated cardboard": "PAP 20",
    "cardboard": "PAP 20",
    "paper": "PAP 20",
    "karton": "PAP 20",
    "papier": "PAP 20",
    "pappe": "PAP 20",
    "bubble wrap": "LDPE 4",
    "plastic film": "LDPE 4",
    "ldpe": "LDPE 4",
    "polyethylene": "LDPE 4",
    "hdpe": "HDPE 2",
    "polypropylene": "PP 5",
    "pp": "PP 5",
    "pet": "PET 1",
    "polystyrene": "PS 6",
    "styrofoam": "PS 6",
    "eps": "EPS 6",
    "ps": "PS 6",
    "glass": "GL 70",
    "aluminum": "ALU 41",
    "aluminium": "ALU 41",
    "steel": "FE 40",
    "tin": "FE 40",
    "wood": "FOR 50",
    "holz": "FOR 50",
    "cotton": "TEX 60",
    "baumwolle": "TEX 60",
    "foam": "PS 6",
    "folie": "LDPE 4",
    "kunststoff": "PP 5",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def packaging_material_codes(materials: List[MaterialInput]) -> List[str]:
    """Recycling codes for the packaging materials, deduplicated in order."""
    codes: List[str] = []
    for material in materials:
        if material.type != "packaging":
            continue
        name = material.name.lower()
        for pattern, code in PACKAGING_MATERIAL_CODES.items():
            if pattern in name:
                if code not in codes:
                    codes.append(code)
                break
    return codes


def format_party_address(party: PartyInput) -> str:
    """Single-line postal address: street, line 2, "postcode city", country."""
    parts: List[str] = []
    if party.address:
        parts.append(party.address)
    if party.address_line2:
        parts.append(party.address_line2)

    city_line = " ".join(p for p in (party.postal_code, party.city) if p)
    if city_line:
        parts.append(city_line)

    if party.country:
        parts.append(party.country)

    return ", ".join(parts)


def build_dpp_url(
    gtin: str,
    serial_number: str,
    *,
    base_url: str = "",
    resolver_format: ResolverFormat = "default",
    custom_base_url: Optional[str] = None,
) -> str:
    """
    Public Digital Product Passport URL for one serialised unit.

    A custom base URL always uses the GS1 Digital Link path layout.
    """
    if custom_base_url:
        return f"{custom_base_url.rstrip('/')}/01/{gtin}/21/{serial_number}"

    base = base_url.rstrip("/")
    if resolver_format == "gs1":
        return f"{base}/01/{gtin}/21/{serial_number}"

    return f"{base}/p/{gtin}/{serial_number}"


def _party_values(prefix: str, party: Optional[PartyInput]) -> Dict[str, Optional[str]]:
    if party is None:
        return {}
    return {
        f"{prefix}Name": party.name,
        f"{prefix}Address": format_party_address(party) or None,
        f"{prefix}Email": party.email,
        f"{prefix}Phone": party.phone,
        f"{prefix}VAT": party.vat,
        f"{prefix}EORI": party.eori,
        f"{prefix}Country": party.country,
    }


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def assemble_label_record(
    product: ProductInput,
    batch: Optional[BatchInput] = None,
    *,
    manufacturer: Optional[PartyInput] = None,
    importer: Optional[PartyInput] = None,
    dpp_url: str = "",
) -> LabelRecord:
    materials = product.materials
    certifications = product.certifications
    if batch is not None:
        if batch.materials_override is not None:
            materials = batch.materials_override
        if batch.certifications_override is not None:
            certifications = batch.certifications_override

    batch_number = (batch.batch_number if batch else None) or product.batch_number
    gross_weight = batch.gross_weight if batch and batch.gross_weight is not None else product.gross_weight
    net_weight = batch.net_weight if batch and batch.net_weight is not None else product.net_weight

    values: Dict[str, Union[str, int, float, None]] = {
        FieldKey.PRODUCT_NAME.value: product.name,
        FieldKey.GTIN.value: product.gtin or None,
        FieldKey.BATCH_NUMBER.value: batch_number,
        FieldKey.SERIAL_NUMBER.value: batch.serial_number if batch else None,
        FieldKey.MANUFACTURER_NAME.value: product.manufacturer or None,
        FieldKey.MANUFACTURER_ADDRESS.value: product.manufacturer_address,
        FieldKey.COUNTRY_OF_ORIGIN.value: product.country_of_origin,
        FieldKey.MADE_IN.value: product.country_of_origin,
        FieldKey.CATEGORY.value: product.category or None,
        FieldKey.GROSS_WEIGHT.value: gross_weight,
        FieldKey.NET_WEIGHT.value: net_weight,
        FieldKey.HS_CODE.value: product.hs_code,
        FieldKey.QUANTITY.value: batch.quantity if batch else None,
        FieldKey.EPREL_NUMBER.value: product.registrations.get("eprelNumber"),
        FieldKey.WEEE_NUMBER.value: product.registrations.get("weeeRegistration"),
        FieldKey.UNIQUE_PRODUCT_ID.value: product.unique_product_id,
        FieldKey.PRODUCTION_DATE.value: batch.production_date if batch else None,
        FieldKey.RECYCLED_CONTENT_PERCENTAGE.value: product.recycled_content_percentage,
        FieldKey.DURABILITY_YEARS.value: product.durability_years,
        FieldKey.REPAIRABILITY_SCORE.value: product.repairability_score,
        FieldKey.DPP_REGISTRY_ID.value: product.dpp_registry_id,
        FieldKey.SAFETY_INFORMATION.value: product.safety_information,
    }

    values.update(_party_values("manufacturer", manufacturer))
    if manufacturer is not None:
        values[FieldKey.MANUFACTURER_WEBSITE.value] = manufacturer.website
        values[FieldKey.MANUFACTURER_CONTACT.value] = manufacturer.contact
        # Supplier master data without an address keeps the product's.
        if not manufacturer.address and product.manufacturer_address:
            values[FieldKey.MANUFACTURER_ADDRESS.value] = product.manufacturer_address
    values.update(_party_values("importer", importer))

    return LabelRecord(
        values=values,
        material_codes=packaging_material_codes(materials),
        certifications=[c.name for c in certifications],
        dpp_url=dpp_url,
        product_group=detect_product_group(product.category),
        manufacturer_country=manufacturer.country if manufacturer else None,
    )
