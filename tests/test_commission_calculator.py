"""
Tests for the commission amount calculation.
"""
import pytest

from shopdesk.services.commission_calculator import (
    calculate_commission,
    direct_commission,
    exceeds_tolerance,
    needs_proportional,
    proportional_commission,
    round_cents,
    DIRECT,
    PROPORTIONAL,
)
from shopdesk.services.errors import UndefinedAllocationError


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [
    (5.004, 5.0),
    (5.005, 5.01),
    (2.675, 2.68),
    (0.125, 0.13),
    (6.000000000000001, 6.0),
    (0, 0.0),
])
def test_round_cents_half_up(value, expected):
    assert round_cents(value) == expected


@pytest.mark.unit
def test_direct_commission_per_category():
    """Sale 100.00 split 60/40 with rates 10% and 5%."""
    assert direct_commission(60.0, 10) == 6.0
    assert direct_commission(40.0, 5) == 2.0


@pytest.mark.unit
def test_direct_commission_zero_rate_is_zero_amount():
    assert direct_commission(125.50, 0) == 0.0


@pytest.mark.unit
def test_proportional_commission_for_distorted_items():
    """Sale total 100.00, items sum to 80.00, category 48.00, rate 10%."""
    result = calculate_commission(sale_total=100.0, category_subtotal=48.0, all_items_subtotal=80.0, rate=10)

    assert result.method == PROPORTIONAL
    assert result.amount == 6.0
    assert result.category_subtotal == 48.0
    assert result.all_items_subtotal == 80.0
    assert result.sale_total == 100.0


@pytest.mark.unit
def test_consistent_sale_uses_direct_path():
    result = calculate_commission(sale_total=100.0, category_subtotal=60.0, all_items_subtotal=100.0, rate=10)

    assert result.method == DIRECT
    assert result.amount == 6.0


@pytest.mark.unit
@pytest.mark.parametrize("total, category, rate", [
    (100.0, 60.0, 10),
    (250.0, 37.0, 8),
    (19.99, 19.99, 12),
    (1234.56, 400.0, 3),
])
def test_proportional_path_matches_direct_when_items_reconcile(total, category, rate):
    assert proportional_commission(total, category, total, rate) == direct_commission(category, rate)


@pytest.mark.unit
def test_difference_within_tolerance_stays_direct():
    assert not needs_proportional(100.0, 100.005)
    assert needs_proportional(100.0, 99.98)

    result = calculate_commission(sale_total=100.0, category_subtotal=50.0, all_items_subtotal=100.005, rate=10)
    assert result.method == DIRECT
    assert result.amount == 5.0


@pytest.mark.unit
def test_missing_sale_total_falls_back_to_items_total():
    result = calculate_commission(sale_total=None, category_subtotal=30.0, all_items_subtotal=90.0, rate=10)

    assert result.method == DIRECT
    assert result.amount == 3.0


@pytest.mark.unit
def test_zero_items_subtotal_with_mismatch_is_undefined():
    with pytest.raises(UndefinedAllocationError):
        calculate_commission(sale_total=50.0, category_subtotal=0.0, all_items_subtotal=0.0, rate=10)


@pytest.mark.unit
def test_zero_sale_with_zero_items_is_direct_zero():
    result = calculate_commission(sale_total=0.0, category_subtotal=0.0, all_items_subtotal=0.0, rate=10)

    assert result.method == DIRECT
    assert result.amount == 0.0


@pytest.mark.unit
def test_exactly_one_cent_difference_stays_direct():
    assert not needs_proportional(10000.01, 10000.00)
    assert exceeds_tolerance(5000.0, 5000.02)
    assert not exceeds_tolerance(5000.0, 5000.01)

    result = calculate_commission(sale_total=10000.01, category_subtotal=10000.0, all_items_subtotal=10000.0, rate=50)
    assert result.method == DIRECT
    assert result.amount == 5000.0
