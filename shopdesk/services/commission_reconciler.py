"""
Recalculo de comisiones existentes

Recorre todas las comisiones, recalcula el monto correcto con las tasas y
los items actuales y corrige las que se desvían más de la tolerancia. Un
error con una comisión no detiene el proceso: se registra y se sigue.
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from ..db import db
from ..models import Commission, SaleItem
from .activity_log import log_activity
from .category_allocator import items_for_category, items_subtotal
from .commission_calculator import calculate_commission, exceeds_tolerance, DEFAULT_TOLERANCE
from .commission_rates import resolve_rate
from .errors import UndefinedAllocationError

logger = logging.getLogger(__name__)


def load_sale_items(sale_id):
    return (
        SaleItem.query.options(joinedload(SaleItem.product))
        .filter_by(sale_id=sale_id)
        .order_by(SaleItem.id)
        .all()
    )


def _tolerance(tolerance):
    if tolerance is not None:
        return tolerance
    return current_app.config.get("COMMISSION_TOLERANCE", DEFAULT_TOLERANCE)


def recompute_commission(commission, sale_items, rate, tolerance=DEFAULT_TOLERANCE):
    """
    Monto correcto de una comisión dados los items de su venta

    Returns:
        CommissionCalculation, o None si la categoría no tiene items
    """
    relevant = items_for_category(
        sale_items,
        commission.category_id,
        all_categories=commission.category_id is None,
    )
    if not relevant:
        return None

    all_items_total = items_subtotal(sale_items)
    sale_total = commission.sale.total_amount if commission.sale else None
    return calculate_commission(
        sale_total=sale_total,
        category_subtotal=items_subtotal(relevant),
        all_items_subtotal=all_items_total,
        rate=rate,
        tolerance=tolerance,
    )


def reconcile_commissions(tolerance=None):
    """
    Recalcula todas las comisiones y corrige las desviadas

    Returns:
        dict con "updates" (cada corrección aplicada) y "skipped" (comisiones
        que no se pudieron recalcular, con el motivo)
    """
    tolerance = _tolerance(tolerance)
    commissions = Commission.query.order_by(Commission.created_at.desc(), Commission.id.desc()).all()

    updates = []
    skipped = []

    for commission in commissions:
        commission_id = commission.id
        if not commission.sale_id or not commission.seller_id:
            continue

        rate = resolve_rate(commission.seller_id, commission.category_id)
        if not rate:
            # Sin tasa (o tasa 0): no se corrige
            continue

        try:
            sale_items = load_sale_items(commission.sale_id)
        except SQLAlchemyError:
            logger.exception("No se pudieron leer los items de la venta %s", commission.sale_id)
            db.session.rollback()
            skipped.append({"id": commission_id, "reason": "Could not load sale items"})
            continue

        try:
            calculation = recompute_commission(commission, sale_items, rate, tolerance)
        except UndefinedAllocationError as e:
            logger.warning("Comisión %s: %s", commission_id, e)
            skipped.append({"id": commission_id, "reason": str(e)})
            continue

        if calculation is None:
            continue

        old_amount = commission.commission_amount
        if not exceeds_tolerance(old_amount, calculation.amount, tolerance):
            continue

        sale = commission.sale
        commission.commission_amount = calculation.amount
        commission.currency = sale.currency
        log_activity(
            action="update",
            entity_type="commission",
            entity_id=commission_id,
            details=f"Recalculated commission: {old_amount} -> {calculation.amount} {sale.currency}",
        )
        db.session.commit()

        updates.append({
            "id": commission_id,
            "sale_id": commission.sale_id,
            "old_amount": old_amount,
            "new_amount": calculation.amount,
            "rate": rate,
            "category_id": commission.category_id,
            "currency": sale.currency,
            "sale_total": sale.total_amount,
            "category_total": calculation.category_subtotal,
            "sale_items_total": calculation.all_items_subtotal,
            "method": calculation.method,
        })

    logger.info(
        "Recalculo de comisiones: %s revisadas, %s corregidas, %s omitidas",
        len(commissions), len(updates), len(skipped),
    )
    return {"updates": updates, "skipped": skipped}
