"""
Tasas de comisión por vendedor y categoría

Una categoría sin tasa configurada NO usa la tasa por defecto del vendedor:
queda sin comisión. Una tasa de 0 es válida y distinta de "sin tasa".
"""
import logging

from ..db import db
from ..models import SellerCategoryRate, Seller, Category
from .activity_log import log_activity
from .errors import InvalidRateError

logger = logging.getLogger(__name__)


def get_rate_row(seller_id, category_id):
    if category_id is None:
        return None
    return SellerCategoryRate.query.filter_by(
        seller_id=seller_id,
        category_id=category_id
    ).first()


def resolve_rate(seller_id, category_id):
    """
    Obtiene el porcentaje de comisión para un vendedor y una categoría

    Returns:
        float entre 0 y 100, o None si no hay tasa configurada
    """
    row = get_rate_row(seller_id, category_id)
    if row is None:
        return None
    return float(row.commission_rate)


def validate_rate(rate):
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        raise InvalidRateError(f"Invalid commission rate: {rate!r}")
    if rate < 0 or rate > 100:
        raise InvalidRateError("Commission rate must be between 0 and 100")
    return rate


def set_rate(seller_id, category_id, rate):
    """Crea o actualiza la tasa del par (vendedor, categoría)"""
    rate = validate_rate(rate)
    seller = db.get_or_404(Seller, seller_id)
    category = db.get_or_404(Category, category_id)

    row = get_rate_row(seller_id, category_id)
    action = "update" if row else "create"
    if row:
        row.commission_rate = rate
    else:
        row = SellerCategoryRate(seller_id=seller_id, category_id=category_id, commission_rate=rate)
        db.session.add(row)

    db.session.flush()
    log_activity(
        action=action,
        entity_type="seller_category_rate",
        entity_id=row.id,
        entity_name=f"{seller.name} - {category.name}",
        details=f"{'Updated' if action == 'update' else 'Set'} commission rate to {rate}%",
    )
    db.session.commit()
    logger.info("Tasa %s: vendedor=%s categoría=%s -> %s%%", action, seller_id, category_id, rate)
    return row


def delete_rate(rate_id):
    row = db.get_or_404(SellerCategoryRate, rate_id)
    name = f"{row.seller.name if row.seller else row.seller_id} - {row.category.name if row.category else row.category_id}"
    db.session.delete(row)
    log_activity(
        action="delete",
        entity_type="seller_category_rate",
        entity_id=rate_id,
        entity_name=name,
        details="Deleted category-specific commission rate",
    )
    db.session.commit()
    logger.info("Tasa eliminada: %s", rate_id)
