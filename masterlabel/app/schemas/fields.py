"""
Field catalog.

Enumerates the product/batch attributes that ``field-value`` elements may
bind to. Values for these keys are supplied at render time by a flat
key -> value lookup (see ``LabelRecord``).
"""

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import ConfigDict

from masterlabel.app.schemas.base import LabelModel


class FieldKey(str, Enum):
    PRODUCT_NAME = "productName"
    GTIN = "gtin"
    BATCH_NUMBER = "batchNumber"
    SERIAL_NUMBER = "serialNumber"
    MANUFACTURER_NAME = "manufacturerName"
    MANUFACTURER_ADDRESS = "manufacturerAddress"
    MANUFACTURER_EMAIL = "manufacturerEmail"
    MANUFACTURER_PHONE = "manufacturerPhone"
    MANUFACTURER_VAT = "manufacturerVAT"
    MANUFACTURER_EORI = "manufacturerEORI"
    MANUFACTURER_WEBSITE = "manufacturerWebsite"
    MANUFACTURER_CONTACT = "manufacturerContact"
    MANUFACTURER_COUNTRY = "manufacturerCountry"
    IMPORTER_NAME = "importerName"
    IMPORTER_ADDRESS = "importerAddress"
    IMPORTER_EMAIL = "importerEmail"
    IMPORTER_PHONE = "importerPhone"
    IMPORTER_VAT = "importerVAT"
    IMPORTER_EORI = "importerEORI"
    IMPORTER_COUNTRY = "importerCountry"
    COUNTRY_OF_ORIGIN = "countryOfOrigin"
    CATEGORY = "category"
    GROSS_WEIGHT = "grossWeight"
    NET_WEIGHT = "netWeight"
    HS_CODE = "hsCode"
    QUANTITY = "quantity"
    EPREL_NUMBER = "eprelNumber"
    WEEE_NUMBER = "weeeNumber"
    MADE_IN = "madeIn"

    # ESPR
    UNIQUE_PRODUCT_ID = "uniqueProductId"
    PRODUCTION_DATE = "productionDate"
    RECYCLED_CONTENT_PERCENTAGE = "recycledContentPercentage"
    DURABILITY_YEARS = "durabilityYears"
    REPAIRABILITY_SCORE = "repairabilityScore"
    DPP_REGISTRY_ID = "dppRegistryId"
    SAFETY_INFORMATION = "safetyInformation"


FieldFormat = Literal["weight", "number"]


class FieldMetadata(LabelModel):
    key: FieldKey
    label_key: str
    section: str
    format: Optional[FieldFormat] = None

    model_config = ConfigDict(frozen=True)


def _field(key: FieldKey, section: str, fmt: Optional[FieldFormat] = None) -> FieldMetadata:
    return FieldMetadata(
        key=key,
        label_key=f"ml.field.{key.value}",
        section=section,
        format=fmt,
    )


FIELD_CATALOG: List[FieldMetadata] = [
    _field(FieldKey.PRODUCT_NAME, "identity"),
    _field(FieldKey.GTIN, "identity"),
    _field(FieldKey.BATCH_NUMBER, "identity"),
    _field(FieldKey.SERIAL_NUMBER, "identity"),
    _field(FieldKey.MANUFACTURER_NAME, "identity"),
    _field(FieldKey.MANUFACTURER_ADDRESS, "identity"),
    _field(FieldKey.MANUFACTURER_EMAIL, "identity"),
    _field(FieldKey.MANUFACTURER_PHONE, "identity"),
    _field(FieldKey.MANUFACTURER_VAT, "identity"),
    _field(FieldKey.MANUFACTURER_EORI, "identity"),
    _field(FieldKey.MANUFACTURER_WEBSITE, "identity"),
    _field(FieldKey.MANUFACTURER_CONTACT, "identity"),
    _field(FieldKey.MANUFACTURER_COUNTRY, "identity"),
    _field(FieldKey.IMPORTER_NAME, "identity"),
    _field(FieldKey.IMPORTER_ADDRESS, "identity"),
    _field(FieldKey.IMPORTER_EMAIL, "identity"),
    _field(FieldKey.IMPORTER_PHONE, "identity"),
    _field(FieldKey.IMPORTER_VAT, "identity"),
    _field(FieldKey.IMPORTER_EORI, "identity"),
    _field(FieldKey.IMPORTER_COUNTRY, "identity"),
    _field(FieldKey.COUNTRY_OF_ORIGIN, "identity"),
    _field(FieldKey.CATEGORY, "identity"),
    _field(FieldKey.GROSS_WEIGHT, "identity", "weight"),
    _field(FieldKey.NET_WEIGHT, "identity", "weight"),
    _field(FieldKey.HS_CODE, "compliance"),
    _field(FieldKey.QUANTITY, "identity", "number"),
    _field(FieldKey.EPREL_NUMBER, "compliance"),
    _field(FieldKey.WEEE_NUMBER, "compliance"),
    _field(FieldKey.MADE_IN, "footer"),
    _field(FieldKey.UNIQUE_PRODUCT_ID, "identity"),
    _field(FieldKey.PRODUCTION_DATE, "identity"),
    _field(FieldKey.RECYCLED_CONTENT_PERCENTAGE, "sustainability", "number"),
    _field(FieldKey.DURABILITY_YEARS, "sustainability", "number"),
    _field(FieldKey.REPAIRABILITY_SCORE, "sustainability", "number"),
    _field(FieldKey.DPP_REGISTRY_ID, "compliance"),
    _field(FieldKey.SAFETY_INFORMATION, "compliance"),
]

_FIELDS_BY_KEY: Dict[FieldKey, FieldMetadata] = {f.key: f for f in FIELD_CATALOG}


def get_field_metadata(key: FieldKey | str) -> FieldMetadata:
    """Return catalog metadata for a field key. Raises ValueError if unknown."""
    return _FIELDS_BY_KEY[FieldKey(key)]
