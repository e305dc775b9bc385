"""
Creación de comisiones faltantes para una venta

Para cada categoría con items en la venta se asegura una comisión del
vendedor de la venta. Las que ya existen o no tienen tasa se reportan como
omitidas. Este camino usa siempre el cálculo directo.
"""
import logging

from sqlalchemy.exc import IntegrityError

from ..db import db
from ..models import Commission, Sale
from .activity_log import log_activity
from .category_allocator import allocate_by_category
from .commission_calculator import direct_commission
from .commission_rates import resolve_rate
from .commission_reconciler import load_sale_items
from .errors import SaleNotFoundError
from .sellers import resolve_seller

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "Already exists"
NO_RATE = "No commission rate set"


def backfill_sale(sale_id, seller_id=None):
    """
    Crea las comisiones que le faltan a una venta

    Raises:
        SaleNotFoundError: la venta no existe
        SellerResolutionError: no se pudo determinar un único vendedor
    """
    sale = db.session.get(Sale, sale_id)
    if sale is None:
        raise SaleNotFoundError(f"Sale {sale_id} not found")

    seller = resolve_seller(sale, seller_id)

    existing = {
        c.category_key: c
        for c in Commission.query.filter_by(sale_id=sale.id, seller_id=seller.id).all()
    }

    created = []
    skipped = []

    for key, group in allocate_by_category(load_sale_items(sale.id)).items():
        if key in existing:
            skipped.append({
                "category_id": group.category_id,
                "reason": ALREADY_EXISTS,
                "commission_id": existing[key].id,
            })
            continue

        rate = resolve_rate(seller.id, group.category_id)
        if rate is None:
            skipped.append({"category_id": group.category_id, "reason": NO_RATE})
            continue

        category_total = group.subtotal
        commission = Commission(
            seller_id=seller.id,
            location_id=sale.location_id,
            category_id=group.category_id,
            sale_id=sale.id,
            commission_amount=direct_commission(category_total, rate),
            currency=sale.currency,
            paid=False,
        )

        # Otro proceso pudo crearla entre la consulta y el insert
        try:
            with db.session.begin_nested():
                db.session.add(commission)
        except IntegrityError:
            logger.warning("Comisión duplicada para venta %s categoría %s", sale.id, key)
            skipped.append({"category_id": group.category_id, "reason": ALREADY_EXISTS})
            continue

        created.append({
            "category_id": group.category_id,
            "rate": rate,
            "category_total": category_total,
            "commission_amount": commission.commission_amount,
            "currency": commission.currency,
            "commission_id": commission.id,
        })

    if created:
        log_activity(
            action="create",
            entity_type="commission",
            entity_id=sale.id,
            entity_name=seller.name,
            details=f"Created {len(created)} missing commissions for sale #{sale.id}",
        )
    db.session.commit()

    logger.info("Venta %s: %s comisiones creadas, %s omitidas", sale.id, len(created), len(skipped))
    return {
        "sale_id": sale.id,
        "seller_id": seller.id,
        "created": created,
        "skipped": skipped,
    }
