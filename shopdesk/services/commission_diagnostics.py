"""
Diagnóstico de una comisión: todo el contexto para revisarla a mano
"""
from ..db import db
from ..models import Commission
from .category_allocator import items_for_category, items_subtotal
from .commission_calculator import calculate_commission, direct_commission, needs_proportional
from .commission_rates import get_rate_row
from .commission_reconciler import load_sale_items
from .errors import UndefinedAllocationError


def check_commission(commission_id):
    commission = db.get_or_404(Commission, commission_id)
    sale = commission.sale
    seller = commission.seller

    sale_items = load_sale_items(commission.sale_id)
    category_items = items_for_category(sale_items, commission.category_id)
    category_total = items_subtotal(category_items)
    all_items_total = items_subtotal(sale_items)

    rate_row = get_rate_row(commission.seller_id, commission.category_id)
    rate = float(rate_row.commission_rate) if rate_row else 0.0
    sale_total = sale.total_amount if sale else 0.0

    warnings = []
    if sale is not None and sale.exchange_rate is None:
        warnings.append("Sale has no exchange rate snapshot")
    if sale is not None and needs_proportional(sale_total, all_items_total):
        warnings.append("Sale items subtotal does not match sale total; proportional allocation applies")
    if rate_row is None:
        warnings.append("No commission rate set for this seller and category")

    expected = None
    method = None
    if rate_row is not None and category_items:
        try:
            calculation = calculate_commission(sale_total, category_total, all_items_total, rate)
            expected, method = calculation.amount, calculation.method
        except UndefinedAllocationError as e:
            warnings.append(str(e))

    return {
        "commission": {
            "id": commission.id,
            "amount": commission.commission_amount,
            "currency": commission.currency,
            "paid": commission.paid,
            "category": commission.category.name if commission.category else None,
        },
        "sale": {
            "id": sale.id if sale else None,
            "total_amount": sale_total,
            "currency": sale.currency if sale else None,
            "exchange_rate": sale.exchange_rate if sale else None,
            "created_at": sale.created_at.isoformat() if sale and sale.created_at else None,
        },
        "seller": {
            "id": seller.id if seller else None,
            "name": seller.name if seller else None,
            "default_rate": seller.commission_rate if seller else None,
        },
        "rate": {
            "commission_rate": rate,
            "is_category_specific": rate_row is not None,
        },
        "items": {
            "all_items": [item.to_dict() for item in sale_items],
            "category_items": [item.to_dict() for item in category_items],
            "category_total": category_total,
            "all_items_total": all_items_total,
        },
        "calculation": {
            "expected_if_using_category_total": direct_commission(category_total, rate),
            "expected_if_using_sale_total": direct_commission(sale_total, rate),
            "expected": expected,
            "method": method,
            "current": commission.commission_amount,
        },
        "warnings": warnings,
    }
