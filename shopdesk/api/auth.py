"""
API: Autenticación
Login con email y contraseña contra la tabla de usuarios
"""
import logging

from flask import Blueprint, request, jsonify

from ..models import User
from ..utils.auth import create_token, verify_request

bp = Blueprint("auth", __name__)

security_logger = logging.getLogger("shopdesk.audit")


@bp.route("/login", methods=["POST"])
def login():
    """Login: devuelve un token JWT"""
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    user = User.query.filter_by(email=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        security_logger.warning("Login fallido para %s", email)
        return jsonify({"error": "Invalid email or password"}), 401

    security_logger.info("Login de %s", email)
    return jsonify({
        "token": create_token(user),
        "user": user.to_dict(),
    })


@bp.route("/verify", methods=["GET"])
def verify():
    """Verifica si el token es válido"""
    user, error = verify_request()
    if user is None:
        return jsonify({"valid": False, "error": error}), 401

    return jsonify({
        "valid": True,
        "user": user.to_dict(),
    })
