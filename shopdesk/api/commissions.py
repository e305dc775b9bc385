"""
API: Comisiones
Consulta, creación manual, borrado, diagnóstico, recalculo, creación de
faltantes y pagos. Todas las rutas requieren rol admin.
"""
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..db import db
from ..models import Category, Commission, Location, Sale, Seller, category_key_for
from ..services.activity_log import log_activity
from ..services.commission_backfill import backfill_sale
from ..services.commission_diagnostics import check_commission
from ..services.commission_payouts import pay_commission, pay_unpaid_commissions
from ..services.commission_reconciler import reconcile_commissions
from ..services.errors import CommissionError, DuplicateCommissionError
from ..utils.auth import admin_required

bp = Blueprint("commissions", __name__)

DUPLICATE_MESSAGE = "A commission already exists for this sale, seller and category"


@bp.errorhandler(CommissionError)
def handle_commission_error(e):
    db.session.rollback()
    return jsonify({"error": str(e)}), e.status_code


@bp.errorhandler(SQLAlchemyError)
def handle_database_error(e):
    db.session.rollback()
    current_app.logger.exception("Error de base de datos en comisiones")
    return jsonify({"error": f"Database error: {e.__class__.__name__}"}), 500


def _parse_bool(value):
    return str(value).lower() in ("1", "true", "yes")


def _is_duplicate_commission(error):
    message = str(error.orig)
    return (
        "uq_commission_sale_seller_category" in message
        or "commissions.category_key" in message
    )


@bp.route("", methods=["GET"])
@admin_required
def get_commissions():
    """Lista comisiones (filtros: seller_id, sale_id, paid)"""
    query = Commission.query

    seller_id = request.args.get("seller_id", type=int)
    if seller_id:
        query = query.filter_by(seller_id=seller_id)

    sale_id = request.args.get("sale_id", type=int)
    if sale_id:
        query = query.filter_by(sale_id=sale_id)

    if "paid" in request.args:
        query = query.filter_by(paid=_parse_bool(request.args["paid"]))

    commissions = query.order_by(Commission.created_at.desc(), Commission.id.desc()).all()
    return jsonify([c.to_dict() for c in commissions])


@bp.route("", methods=["POST"])
@admin_required
def create_commission():
    """
    Crea una comisión con monto dado (herramienta manual, sin cálculo)
    La moneda se toma de la venta
    """
    data = request.get_json(silent=True) or {}

    missing = [f for f in ("sale_id", "seller_id", "location_id", "amount") if data.get(f) is None]
    if missing:
        return jsonify({"error": f"Missing required fields: {', '.join(missing)}"}), 400

    try:
        amount = float(data["amount"])
    except (TypeError, ValueError):
        return jsonify({"error": "amount must be a number"}), 400

    sale = db.get_or_404(Sale, data["sale_id"])
    db.get_or_404(Seller, data["seller_id"])
    db.get_or_404(Location, data["location_id"])
    category_id = data.get("category_id")
    if category_id is not None:
        db.get_or_404(Category, category_id)

    existing = Commission.query.filter_by(
        sale_id=sale.id,
        seller_id=data["seller_id"],
        category_key=category_key_for(category_id),
    ).first()
    if existing:
        raise DuplicateCommissionError(DUPLICATE_MESSAGE)

    commission = Commission(
        sale_id=sale.id,
        seller_id=data["seller_id"],
        location_id=data["location_id"],
        category_id=category_id,
        commission_amount=amount,
        currency=sale.currency,
        paid=False,
    )
    db.session.add(commission)

    try:
        db.session.flush()
    except IntegrityError as e:
        # Otras violaciones (FK, NOT NULL) van al handler de base de datos
        if not _is_duplicate_commission(e):
            raise
        raise DuplicateCommissionError(DUPLICATE_MESSAGE)

    log_activity(
        action="create",
        entity_type="commission",
        entity_id=commission.id,
        details=f"Created commission manually: {amount} {sale.currency} for sale #{sale.id}",
    )
    db.session.commit()

    return jsonify({"success": True, "commission": commission.to_dict()}), 201


@bp.route("/delete", methods=["POST"])
@admin_required
def delete_commissions():
    """Elimina comisiones por lista de IDs"""
    data = request.get_json(silent=True) or {}
    commission_ids = data.get("commission_ids")

    if not isinstance(commission_ids, list) or not commission_ids:
        return jsonify({"error": "commission_ids array required"}), 400

    deleted = Commission.query.filter(Commission.id.in_(commission_ids)).delete(synchronize_session=False)
    log_activity(
        action="delete",
        entity_type="commission",
        details=f"Deleted {deleted} commissions: {commission_ids}",
    )
    db.session.commit()

    return jsonify({
        "success": True,
        "deleted": deleted,
        "message": f"Deleted {deleted} commissions",
    })


@bp.route("/<int:id>/check", methods=["GET"])
@admin_required
def get_commission_check(id):
    """Contexto completo de una comisión para revisión manual"""
    return jsonify(check_commission(id))


@bp.route("/recalculate", methods=["POST"])
@admin_required
def recalculate_commissions():
    """Recalcula todas las comisiones y corrige las desviadas"""
    report = reconcile_commissions()
    return jsonify({
        "success": True,
        "message": f"Recalculated {len(report['updates'])} commissions",
        "updates": report["updates"],
        "skipped": report["skipped"],
    })


@bp.route("/backfill", methods=["POST"])
@admin_required
def create_missing_commissions():
    """Crea las comisiones faltantes de una venta"""
    data = request.get_json(silent=True) or {}
    sale_id = data.get("sale_id")
    if not sale_id:
        return jsonify({"error": "sale_id required"}), 400

    report = backfill_sale(sale_id, seller_id=data.get("seller_id"))
    return jsonify({
        "success": True,
        "message": f"Created {len(report['created'])} missing commissions",
        **report,
    })


@bp.route("/<int:id>/pay", methods=["POST"])
@admin_required
def mark_commission_paid(id):
    """Marca una comisión como pagada"""
    commission = pay_commission(id)
    return jsonify(commission.to_dict())


@bp.route("/payout", methods=["POST"])
@admin_required
def payout_commissions():
    """Paga todas las comisiones pendientes de un vendedor desde una billetera"""
    data = request.get_json(silent=True) or {}
    if not data.get("seller_id") or not data.get("wallet_id"):
        return jsonify({"error": "seller_id and wallet_id required"}), 400

    result = pay_unpaid_commissions(
        data["seller_id"],
        data["wallet_id"],
        exchange_rate=data.get("exchange_rate"),
    )
    return jsonify({"success": True, **result})
