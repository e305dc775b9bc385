"""
API: Ventas (solo lectura)
Las ventas se registran en otro módulo; aquí se consulta su contexto
"""
from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..db import db
from ..models import Sale
from ..services.category_allocator import allocate_by_category, items_subtotal
from ..services.sellers import sellers_for_location
from ..utils.auth import admin_required

bp = Blueprint("sales", __name__)


@bp.errorhandler(SQLAlchemyError)
def handle_database_error(e):
    db.session.rollback()
    current_app.logger.exception("Error de base de datos en ventas")
    return jsonify({"error": f"Database error: {e.__class__.__name__}"}), 500


@bp.route("/<int:id>", methods=["GET"])
@admin_required
def get_sale_info(id):
    """Venta con sus items por categoría y los vendedores de su local"""
    sale = db.get_or_404(Sale, id)
    groups = allocate_by_category(sale.items)

    return jsonify({
        "sale": sale.to_dict(),
        "items": [item.to_dict() for item in sale.items],
        "items_total": items_subtotal(sale.items),
        "categories": [group.to_dict() for group in groups.values()],
        "sellers": [s.to_dict() for s in sellers_for_location(sale.location_id)],
    })
