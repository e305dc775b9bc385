"""
Tests for grouping sale items by product category.
"""
from types import SimpleNamespace

import pytest

from shopdesk.services.category_allocator import (
    UNCATEGORIZED,
    allocate_by_category,
    items_for_category,
    items_subtotal,
)


def make_item(item_id, category_id, subtotal):
    return SimpleNamespace(
        id=item_id,
        subtotal=subtotal,
        product=SimpleNamespace(category_id=category_id),
    )


@pytest.fixture
def items():
    return [
        make_item(1, 10, 25.0),
        make_item(2, 20, 40.0),
        make_item(3, 10, 15.5),
        make_item(4, None, 9.5),
        make_item(5, 30, 0.0),
    ]


@pytest.mark.unit
def test_groups_items_by_category(items):
    groups = allocate_by_category(items)

    assert list(groups) == ["10", "20", UNCATEGORIZED, "30"]
    assert [i.id for i in groups["10"].items] == [1, 3]
    assert groups["10"].subtotal == 40.5
    assert groups["10"].category_id == 10
    assert groups[UNCATEGORIZED].category_id is None
    assert groups[UNCATEGORIZED].subtotal == 9.5


@pytest.mark.unit
def test_partition_is_exhaustive_and_disjoint(items):
    groups = allocate_by_category(items)

    grouped_ids = [item.id for group in groups.values() for item in group.items]
    assert sorted(grouped_ids) == [item.id for item in items]
    assert len(grouped_ids) == len(set(grouped_ids))


@pytest.mark.unit
def test_group_subtotals_add_up_to_items_subtotal(items):
    groups = allocate_by_category(items)

    assert sum(g.subtotal for g in groups.values()) == pytest.approx(items_subtotal(items))


@pytest.mark.unit
def test_item_without_product_is_uncategorized():
    item = SimpleNamespace(id=1, subtotal=5.0, product=None)

    groups = allocate_by_category([item])

    assert list(groups) == [UNCATEGORIZED]


@pytest.mark.unit
def test_empty_sale_has_no_groups():
    assert allocate_by_category([]) == {}
    assert items_subtotal([]) == 0


@pytest.mark.unit
def test_items_for_category(items):
    assert [i.id for i in items_for_category(items, 10)] == [1, 3]
    assert [i.id for i in items_for_category(items, None)] == [4]
    assert [i.id for i in items_for_category(items, None, all_categories=True)] == [1, 2, 3, 4, 5]
    assert items_for_category(items, 99) == []
