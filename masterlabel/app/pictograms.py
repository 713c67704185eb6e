"""
Built-in regulatory pictograms.

Each pictogram is a single SVG path with its viewBox, renderable both in
HTML previews and by PDF backends. Pictogram elements with
``source="builtin"`` reference entries here by id.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import ConfigDict

from masterlabel.app.schemas.base import LabelModel


PictogramCategory = Literal[
    "compliance",
    "recycling",
    "chemicals",
    "energy",
    "safety",
    "handling",
]


class BuiltinPictogram(LabelModel):
    id: str
    name: str
    category: PictogramCategory
    view_box: str
    svg_path: str
    mandatory: bool = False
    description: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def aspect_ratio(self) -> float:
        """Height / width of the viewBox."""
        _, _, width, height = (float(v) for v in self.view_box.split())
        return height / width


BUILTIN_PICTOGRAMS: Tuple[BuiltinPictogram, ...] = (
    # Compliance
    BuiltinPictogram(
        id="ce-mark",
        name="CE Marking",
        category="compliance",
        view_box="0 0 100 60",
        svg_path=(
            "M35 5C18.4 5 5 18.4 5 35s13.4 25 25 25c8.5 0 16.1-4.3 20.6-10.8l-7.4-4.3"
            "C40.3 49.5 36 52 31 52c-9.4 0-17-7.6-17-17s7.6-17 17-17c5 0 9.4 2.5 12.2 6.3"
            "l7.3-4.4C46.1 13.6 38.5 5 35 5zM70 5c-6.1 0-11.6 2.5-15.5 6.5l7.2 4.3"
            "C64.2 12.6 67 11 70 11c5 0 9 4 9 9H63v6h16c0 5-4 9-9 9-3 0-5.8-1.6-8.3-4.8"
            "l-7.2 4.3C58.4 39.5 63.9 47 70 47c11 0 20-9 20-20S81 5 70 5z"
        ),
        description="Conformite Europeenne marking required for products sold in the EEA.",
    ),
    BuiltinPictogram(
        id="ukca-mark",
        name="UKCA Marking",
        category="compliance",
        view_box="0 0 100 100",
        svg_path=(
            "M50 5C25.1 5 5 25.1 5 50s20.1 45 45 45 45-20.1 45-45S74.9 5 50 5zm0 8"
            "c20.4 0 37 16.6 37 37S70.4 87 50 87 13 70.4 13 50s16.6-37 37-37zM33 35v16"
            "c0 5.5 4.5 10 10 10s10-4.5 10-10V35h-6v16c0 2.2-1.8 4-4 4s-4-1.8-4-4V35h-6z"
            "m30 0v26h6v-10h4l5 10h7l-6-11c3-2 5-5 5-8 0-5.5-4.5-9-10-9h-11zm6 6h5"
            "c2.2 0 4 1.3 4 3s-1.8 3-4 3h-5v-6z"
        ),
        description="UK Conformity Assessed marking for the Great Britain market.",
    ),
    BuiltinPictogram(
        id="rohs-stamp",
        name="RoHS Compliant",
        category="compliance",
        view_box="0 0 100 100",
        svg_path=(
            "M50 5C25.1 5 5 25.1 5 50s20.1 45 45 45 45-20.1 45-45S74.9 5 50 5zm0 8"
            "c20.4 0 37 16.6 37 37S70.4 87 50 87 13 70.4 13 50s16.6-37 37-37zM30 38v24h6"
            "v-8h3l5 8h7l-6-9c3-1.5 5-4.5 5-7.5 0-5-4-7.5-9-7.5h-11zm6 5h4c2 0 3.5 1 3.5 3"
            "s-1.5 3-3.5 3h-4v-6zm20-5v24h6V49h8v-5h-8v-1h8v-5h-14z"
        ),
        description="Restriction of Hazardous Substances in electrical and electronic equipment.",
    ),
    # Recycling
    BuiltinPictogram(
        id="weee-bin",
        name="WEEE Wheelie Bin",
        category="recycling",
        view_box="0 0 100 120",
        svg_path=(
            "M30 5v8H15v10h70V13H70V5H30zm-5 22l5 78h40l5-78H25zm15 10h4v58h-4V37z"
            "m8 0h4v58h-4V37zm8 0h4v58h-4V37z M20 110v4h60v-4H20z"
        ),
        mandatory=True,
        description="WEEE directive crossed-out wheelie bin symbol for electronic waste.",
    ),
    BuiltinPictogram(
        id="mobius-loop",
        name="Recycling Triangle",
        category="recycling",
        view_box="0 0 100 100",
        svg_path=(
            "M50 8L15 68h12l23-42 23 42h12L50 8zM22 72l-12 20h28l-4-7H24l2-3 4-7-8-3z"
            "m56 0l-8 3 4 7 2 3H66l-4 7h28L78 72z"
        ),
        description="Universal recycling symbol (Mobius loop). Indicates material is recyclable.",
    ),
    BuiltinPictogram(
        id="tidyman",
        name="Tidyman",
        category="recycling",
        view_box="0 0 80 100",
        svg_path=(
            "M45 5a7 7 0 100 14 7 7 0 000-14zM35 22l-15 30h8l8-16v54h8V58h2v32h8V36"
            "l8 16h8L55 22H35zM10 65v30h25v-6H16V65H10z"
        ),
        description="Tidyman symbol encouraging proper disposal of packaging waste.",
    ),
    BuiltinPictogram(
        id="green-dot",
        name="Gruener Punkt",
        category="recycling",
        view_box="0 0 100 100",
        svg_path=(
            "M50 5C25.1 5 5 25.1 5 50s20.1 45 45 45 45-20.1 45-45S74.9 5 50 5zm0 10"
            "c7 0 13.5 2.1 19 5.6L35 65c-3-5-5-11-5-17 0-13.8 8.9-25.5 21.3-29.7L50 15z"
            "m19.7 8.3C80.1 30.5 85 39.7 85 50c0 19.3-15.7 35-35 35-7 0-13.5-2.1-19-5.6"
            "L65 35c3 5 5 11 5 17 0 3.2-.5 6.3-1.5 9.2L69.7 23.3z"
        ),
        description="Green Dot indicates participation in a packaging recovery system.",
    ),
    BuiltinPictogram(
        id="triman",
        name="Triman",
        category="recycling",
        view_box="0 0 100 100",
        svg_path=(
            "M50 5C25.1 5 5 25.1 5 50s20.1 45 45 45 45-20.1 45-45S74.9 5 50 5zm0 8"
            "c20.4 0 37 16.6 37 37S70.4 87 50 87 13 70.4 13 50s16.6-37 37-37zM50 25"
            "a5 5 0 100 10 5 5 0 000-10zm-3 14v3l-10 18h6l7-13 7 13h6L53 42v-3h-6z"
            "m-15 25l8-4 4 7-8 4-4-7zm30 0l4 7-8 4-4-7 8-4z"
        ),
        description="French Triman logo indicating the product should be sorted for recycling.",
    ),
    BuiltinPictogram(
        id="battery-disposal",
        name="Battery Collection",
        category="recycling",
        view_box="0 0 80 100",
        svg_path=(
            "M25 5v8H15v10h50V13H55V5H25zm-5 22v58h40V27H20zm10 8h20v6H30v-6zm0 12h20"
            "v6H30v-6zm0 12h20v6H30v-6z M10 90v4h60v-4H10z M35 90l5 8 5-8h-10z"
        ),
        description="Battery collection symbol indicating separate disposal of batteries.",
    ),
    # Chemicals
    BuiltinPictogram(
        id="ghs-flame",
        name="GHS Flammable",
        category="chemicals",
        view_box="0 0 100 100",
        svg_path=(
            "M50 2L2 88h96L50 2zm0 20c5 15 15 20 15 35 0 10-7 18-15 18s-15-8-15-18"
            "c0-15 10-20 15-35z"
        ),
        description="GHS flammable hazard pictogram.",
    ),
    BuiltinPictogram(
        id="ghs-skull",
        name="GHS Toxic",
        category="chemicals",
        view_box="0 0 100 100",
        svg_path=(
            "M50 2L2 88h96L50 2zm0 22c10 0 18 8 18 18v2c0 3-1 5-3 7l3 5h-8l-2-4h-16"
            "l-2 4h-8l3-5c-2-2-3-4-3-7v-2c0-10 8-18 18-18zm-7 12a4 4 0 100 8 4 4 0 000-8z"
            "m14 0a4 4 0 100 8 4 4 0 000-8zm-7 18v4h-6v4h6v-4h6v-4h-6z"
        ),
        description="GHS acute toxicity pictogram.",
    ),
    BuiltinPictogram(
        id="ghs-exclamation",
        name="GHS Warning",
        category="chemicals",
        view_box="0 0 100 100",
        svg_path="M50 2L2 88h96L50 2zm-3 28h6v30h-6V30zm0 38h6v6h-6v-6z",
        description="GHS exclamation mark for irritants and lower-level health hazards.",
    ),
    BuiltinPictogram(
        id="ghs-corrosion",
        name="GHS Corrosive",
        category="chemicals",
        view_box="0 0 100 100",
        svg_path=(
            "M50 2L2 88h96L50 2zm-10 30h6l-4 20c2-1 5-2 8-2s6 1 8 2l-4-20h6l2 10-8 18"
            "c-2 3-3 5-4 8h-4c-1-3-2-5-4-8L38 42l2-10z"
        ),
        description="GHS corrosion pictogram.",
    ),
    # Energy
    BuiltinPictogram(
        id="energy-arrow",
        name="EU Energy Label",
        category="energy",
        view_box="0 0 100 60",
        svg_path="M5 10h60l25 20-25 20H5V10zm10 8v24h42l15-12-15-12H15z",
        description="EU energy label arrow used in energy efficiency classification.",
    ),
    # Safety
    BuiltinPictogram(
        id="food-safe",
        name="Food Contact",
        category="safety",
        view_box="0 0 100 100",
        svg_path=(
            "M25 10v60c0 11 11 20 25 20s25-9 25-20V10h-6v60c0 8-8.5 14-19 14S31 78 31 70"
            "V10h-6zm12 0v45c0 8 5.5 14 13 14s13-6 13-14V10h-4v45c0 5.5-3.6 10-9 10"
            "s-9-4.5-9-10V10h-4z"
        ),
        description="Food contact material (glass + fork) symbol per Regulation (EC) 1935/2004.",
    ),
    # Handling (ISO 780)
    BuiltinPictogram(
        id="iso780-this-way-up",
        name="This Way Up",
        category="handling",
        view_box="0 0 100 100",
        svg_path=(
            "M30 10L15 35h10v40h10V35h10L30 10zm40 0L55 35h10v40h10V35h10L70 10z"
            "M10 85v6h80v-6H10z"
        ),
        description="ISO 780 handling mark: keep the package upright.",
    ),
    BuiltinPictogram(
        id="iso780-fragile",
        name="Fragile",
        category="handling",
        view_box="0 0 100 100",
        svg_path=(
            "M25 8h50v22c0 13-9 23-21 25v27h14v8H32v-8h14V55C34 53 25 43 25 30V8z"
            "m12 6l-4 10 8 6-6 10 12-12-8-6 4-8h-6z"
        ),
        description="ISO 780 handling mark: contents are fragile, handle with care.",
    ),
    BuiltinPictogram(
        id="iso780-keep-dry",
        name="Keep Dry",
        category="handling",
        view_box="0 0 100 100",
        svg_path=(
            "M50 8C26 8 8 24 8 44h38v36c0 4-3 6-6 6s-6-2-6-6h-8c0 8 6 14 14 14s14-6 14-14"
            "V44h38C92 24 74 8 50 8zM20 56l-4 8h8l-4-8zm60 0l-4 8h8l-4-8zM34 60l-4 8h8"
            "l-4-8zm32 0l-4 8h8l-4-8z"
        ),
        description="ISO 780 handling mark: keep away from rain and moisture.",
    ),
)

_PICTOGRAMS_BY_ID: Dict[str, BuiltinPictogram] = {p.id: p for p in BUILTIN_PICTOGRAMS}


def get_builtin_pictogram(pictogram_id: str) -> Optional[BuiltinPictogram]:
    return _PICTOGRAMS_BY_ID.get(pictogram_id)


def get_builtin_pictograms_by_category(category: str) -> List[BuiltinPictogram]:
    return [p for p in BUILTIN_PICTOGRAMS if p.category == category]
