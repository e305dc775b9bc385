"""
Autenticación por token JWT (Bearer)
El token identifica al usuario; el rol se verifica contra la base de datos
"""
import datetime
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request

from ..db import db
from ..models import User


def create_token(user):
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.datetime.utcnow() + datetime.timedelta(days=current_app.config.get("JWT_EXPIRATION_DAYS", 7)),
    }
    return jwt.encode(
        payload,
        current_app.config.get("SECRET_KEY"),
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def verify_request():
    """
    Valida el token del header Authorization

    Returns:
        tuple (user, error): user es None si no se pudo autenticar
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None, "No session found"

    token = auth_header.split(" ", 1)[1]
    try:
        payload = jwt.decode(
            token,
            current_app.config.get("SECRET_KEY"),
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        )
    except jwt.ExpiredSignatureError:
        return None, "Session expired"
    except jwt.InvalidTokenError:
        return None, "Invalid session"

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None, "Invalid session data"

    user = db.session.get(User, user_id)
    if user is None or not user.is_active:
        return None, "User not found or inactive"
    return user, None


def require_role(*roles):
    """Decorador: exige usuario autenticado con alguno de los roles"""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user, error = verify_request()
            if user is None:
                return jsonify({"error": "Unauthorized", "message": error}), 401
            if roles and user.role not in roles:
                return jsonify({
                    "error": "Forbidden",
                    "message": f"One of these roles required: {', '.join(roles)}"
                }), 403
            g.current_user = user
            return view(*args, **kwargs)
        return wrapper
    return decorator


admin_required = require_role("admin")
