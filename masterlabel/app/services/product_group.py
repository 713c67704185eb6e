"""
Product group detection.

Maps a free-text product category to one of the label product groups.
Resolution order:

1. exact match in the category table
2. case-insensitive match in the category table
3. keyword pattern fallback
4. ``general``
"""

import re
from typing import Dict, List, Pattern, Tuple

from masterlabel.app.schemas.record import ProductGroup


CATEGORY_TO_PRODUCT_GROUP: Dict[str, ProductGroup] = {
    # Electronics
    "Electronics": "electronics",
    "Consumer Electronics": "electronics",
    "IT Equipment": "electronics",
    "Telecommunications": "electronics",
    "Electrical Equipment": "electronics",
    "Batteries": "electronics",
    "Lighting": "electronics",
    "Smart Home": "electronics",
    "Audio & Video": "electronics",
    "Wearables": "electronics",
    "Computer Hardware": "electronics",
    # Textiles
    "Textiles": "textiles",
    "Clothing": "textiles",
    "Footwear": "textiles",
    "Fashion": "textiles",
    "Home Textiles": "textiles",
    "Sportswear": "textiles",
    "Workwear": "textiles",
    # Toys
    "Toys": "toys",
    "Games": "toys",
    "Children Products": "toys",
    "Baby Products": "toys",
    # Household
    "Household": "household",
    "Kitchen": "household",
    "Home & Garden": "household",
    "Cleaning": "household",
    "Food Contact Materials": "household",
    "Furniture": "household",
    "Kitchenware": "household",
}

_LOWER_CATEGORY_TO_PRODUCT_GROUP: Dict[str, ProductGroup] = {
    key.lower(): group for key, group in CATEGORY_TO_PRODUCT_GROUP.items()
}

CATEGORY_NAME_PATTERNS: List[Tuple[Pattern[str], ProductGroup]] = [
    (
        re.compile(
            r"electr|batter|power|charger|cable|audio|video|smart|iot|sensor|led|lamp|lighting",
            re.IGNORECASE,
        ),
        "electronics",
    ),
    (
        re.compile(
            r"textil|cloth|wear|fabric|shirt|pant|dress|shoe|boot|sneaker|jacket",
            re.IGNORECASE,
        ),
        "textiles",
    ),
    (
        re.compile(r"toy|game|play|child|baby|kid|infant|doll|puzzle", re.IGNORECASE),
        "toys",
    ),
    (
        re.compile(
            r"household|kitchen|cook|clean|furnitur|garden|home.*app|food.*contact",
            re.IGNORECASE,
        ),
        "household",
    ),
]

# Groups for which CE marking is mandatory.
CE_APPLICABLE_GROUPS = frozenset({"electronics", "toys", "household"})


def detect_product_group(category: str) -> ProductGroup:
    if not category:
        return "general"

    exact = CATEGORY_TO_PRODUCT_GROUP.get(category)
    if exact:
        return exact

    folded = _LOWER_CATEGORY_TO_PRODUCT_GROUP.get(category.lower())
    if folded:
        return folded

    for pattern, group in CATEGORY_NAME_PATTERNS:
        if pattern.search(category):
            return group

    return "general"
