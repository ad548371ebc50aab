"""
Vendor keyword to spending category lookup.

The table is an ordered tuple: the first rule with a keyword contained in
the vendor name wins, so declaration order is the tie-break.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Expense categories a movement can be filed under."""
    FOOD = "Food"
    TRANSPORT = "Transport"
    SERVICES = "Services"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    SHOPPING = "Shopping"


@dataclass(frozen=True)
class CategoryRule:
    """Keywords that map a vendor to a category and nominal transaction type."""
    name: str
    keywords: Tuple[str, ...]
    category: Category
    transaction_type: str = "expense"


@dataclass(frozen=True)
class CategoryMatch:
    category: Category
    transaction_type: str
    rule: str
    keyword: str


VENDOR_CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule('oxxo', ('oxxo', 'tienda'), Category.FOOD),
    CategoryRule('walmart', ('walmart', 'supercenter'), Category.SHOPPING),
    CategoryRule('soriana', ('soriana', 'super'), Category.FOOD),
    CategoryRule('chedraui', ('chedraui',), Category.FOOD),
    CategoryRule('pemex', ('pemex', 'gasolina', 'combustible'), Category.TRANSPORT),
    CategoryRule('cfe', ('cfe', 'comisión federal', 'electricidad'), Category.SERVICES),
    CategoryRule('telmex', ('telmex', 'teléfono', 'internet'), Category.SERVICES),
    CategoryRule('telcel', ('telcel', 'celular', 'móvil'), Category.SERVICES),
    CategoryRule('uber', ('uber', 'viaje'), Category.TRANSPORT),
    CategoryRule('netflix', ('netflix', 'streaming'), Category.ENTERTAINMENT),
    CategoryRule('spotify', ('spotify', 'música'), Category.ENTERTAINMENT),
    CategoryRule('farmacias', ('farmacia', 'guadalajara', 'benavides', 'del ahorro'), Category.HEALTH),
    CategoryRule('farmacity', ('farmacity', 'farma'), Category.HEALTH),
    CategoryRule('dia', ('dia argentina', 'dia', 'supermercado dia'), Category.FOOD),
    CategoryRule('carrefour', ('carrefour', 'carrefour express'), Category.FOOD),
    CategoryRule('disco', ('disco', 'supermercado disco'), Category.FOOD),
    CategoryRule('jumbo', ('jumbo', 'supermercado jumbo'), Category.FOOD),
    CategoryRule('restaurante', ('restaurante', 'comida', 'alimentos'), Category.FOOD),
    CategoryRule('gasolinera', ('gasolinera', 'gas', 'combustible'), Category.TRANSPORT),
)


def classify_vendor(
    vendor: Optional[str],
    rules: Tuple[CategoryRule, ...] = VENDOR_CATEGORY_RULES
) -> Optional[CategoryMatch]:
    """
    Map a vendor name to a spending category.

    Args:
        vendor: Extracted vendor name (None skips classification)
        rules: Ordered rule table

    Returns:
        CategoryMatch for the first matching rule, or None
    """
    if not vendor:
        return None

    vendor_lower = vendor.lower()

    for rule in rules:
        for keyword in rule.keywords:
            if keyword in vendor_lower:
                logger.debug("Vendor categorized", extra={
                    "vendor": vendor,
                    "rule": rule.name,
                    "keyword": keyword,
                    "category": rule.category.value,
                })
                return CategoryMatch(
                    category=rule.category,
                    transaction_type=rule.transaction_type,
                    rule=rule.name,
                    keyword=keyword,
                )

    return None
