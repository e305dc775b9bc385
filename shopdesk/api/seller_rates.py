"""
API: Tasas de comisión por categoría
"""
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..db import db
from ..models import SellerCategoryRate
from ..services.commission_rates import set_rate, delete_rate
from ..services.errors import CommissionError
from ..utils.auth import admin_required

bp = Blueprint("seller_rates", __name__)


@bp.errorhandler(CommissionError)
def handle_commission_error(e):
    db.session.rollback()
    return jsonify({"error": str(e)}), e.status_code


@bp.errorhandler(SQLAlchemyError)
def handle_database_error(e):
    db.session.rollback()
    current_app.logger.exception("Error de base de datos en tasas de comisión")
    return jsonify({"error": f"Database error: {e.__class__.__name__}"}), 500


@bp.route("", methods=["GET"])
@admin_required
def get_rates():
    """Lista tasas (filtro opcional: seller_id)"""
    query = SellerCategoryRate.query

    seller_id = request.args.get("seller_id", type=int)
    if seller_id:
        query = query.filter_by(seller_id=seller_id)

    rates = query.order_by(SellerCategoryRate.seller_id, SellerCategoryRate.category_id).all()
    return jsonify([r.to_dict() for r in rates])


@bp.route("", methods=["PUT"])
@admin_required
def put_rate():
    """Crea o actualiza la tasa de un vendedor para una categoría"""
    data = request.get_json(silent=True) or {}

    if not data.get("seller_id") or not data.get("category_id") or data.get("commission_rate") is None:
        return jsonify({"error": "seller_id, category_id and commission_rate are required"}), 400

    rate = set_rate(data["seller_id"], data["category_id"], data["commission_rate"])
    return jsonify(rate.to_dict())


@bp.route("/<int:id>", methods=["DELETE"])
@admin_required
def remove_rate(id):
    """Elimina una tasa por categoría"""
    delete_rate(id)
    return jsonify({"message": "Commission rate deleted"})
