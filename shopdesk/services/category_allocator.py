"""
Agrupación de items de venta por categoría

Cada item cae en exactamente un grupo; los productos sin categoría van al
grupo "uncategorized". La suma de los subtotales de los grupos es la suma de
los subtotales de los items (no necesariamente el total de la venta).
"""
from ..models import UNCATEGORIZED, category_key_for


class CategoryGroup:
    """Items de una categoría dentro de una venta"""

    def __init__(self, key, category_id):
        self.key = key
        self.category_id = category_id
        self.items = []

    @property
    def subtotal(self):
        return items_subtotal(self.items)

    def to_dict(self):
        return {
            "category_key": self.key,
            "category_id": self.category_id,
            "item_ids": [item.id for item in self.items],
            "subtotal": self.subtotal,
        }


def item_category_id(item):
    product = getattr(item, "product", None)
    return product.category_id if product is not None else None


def items_subtotal(items):
    return sum(float(item.subtotal or 0) for item in items)


def allocate_by_category(items):
    """
    Agrupa items por categoría de su producto

    Returns:
        dict: category_key -> CategoryGroup, en el orden en que aparecen
    """
    groups = {}
    for item in items:
        category_id = item_category_id(item)
        key = category_key_for(category_id)
        if key not in groups:
            groups[key] = CategoryGroup(key, category_id)
        groups[key].items.append(item)
    return groups


def items_for_category(items, category_id, all_categories=False):
    """
    Items de una categoría. Con all_categories=True (comisión sin filtro de
    categoría) devuelve todos los items.
    """
    if all_categories:
        return list(items)
    key = category_key_for(category_id)
    return [item for item in items if category_key_for(item_category_id(item)) == key]


__all__ = [
    "UNCATEGORIZED",
    "CategoryGroup",
    "allocate_by_category",
    "items_for_category",
    "items_subtotal",
]
