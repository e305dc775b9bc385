"""
ShopDesk - Aplicación Flask Principal
Panel de ventas y comisiones
"""
import os
from flask import Flask
from flask_cors import CORS
from shopdesk.config import get_config
from shopdesk.db import db
from shopdesk.logging_config import setup_logging


def create_app(config_object=None):
    """Factory para crear la aplicación Flask"""
    app = Flask(__name__)

    # Cargar configuración
    app.config.from_object(config_object or get_config())

    setup_logging(app)
    app.logger.info("Database URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])

    # Habilitar CORS
    allowed_origins = app.config["ALLOWED_ORIGINS"]
    if "*" in allowed_origins:
        # Desarrollo: permitir todos
        CORS(app, resources={r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }})
    else:
        # Producción: dominios específicos
        CORS(app, resources={r"/api/*": {
            "origins": allowed_origins,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }})

    # Inicializar base de datos
    db.init_app(app)

    with app.app_context():
        # Importar modelos para que create_all conozca las tablas
        from shopdesk import models  # noqa: F401

        if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite:///"):
            os.makedirs(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'instance'), exist_ok=True)

        db.create_all()

        ensure_admin_user(app)

        if app.config["FLASK_ENV"] == "development" and not app.config["TESTING"]:
            init_dev_data(app)

    # Registrar blueprints de APIs
    from shopdesk.api import auth_bp, commissions_bp, seller_rates_bp, sales_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(commissions_bp, url_prefix="/api/commissions")
    app.register_blueprint(seller_rates_bp, url_prefix="/api/seller-rates")
    app.register_blueprint(sales_bp, url_prefix="/api/sales")

    # Ruta de health check
    @app.route("/health")
    def health():
        return {"status": "ok", "message": "ShopDesk is running"}

    return app


def ensure_admin_user(app):
    """Crea el usuario admin inicial si hay credenciales configuradas"""
    from shopdesk.models import User

    email = (app.config.get("ADMIN_EMAIL") or "").strip().lower()
    password = app.config.get("ADMIN_PASSWORD")
    if not email or not password:
        return

    if User.query.filter_by(email=email).first():
        return

    admin = User(email=email, name="Admin", role="admin")
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    app.logger.info("Usuario admin creado: %s", email)


def init_dev_data(app):
    """Inicializa datos de desarrollo"""
    from shopdesk.models import Location, Category, Seller

    # Verificar si ya hay datos
    if Location.query.first():
        return

    location = Location(name="Main Store")
    db.session.add(location)

    categories = [Category(name=name) for name in ("Accessories", "Clothing", "Electronics")]
    for cat in categories:
        db.session.add(cat)

    db.session.flush()  # Para obtener los IDs

    db.session.add(Seller(name="Main Store Seller", location_id=location.id, commission_rate=10.0))

    db.session.commit()
    app.logger.info("Datos de desarrollo inicializados (1 local, 3 categorías, 1 vendedor)")


# Crear instancia de la app para gunicorn
app = create_app()

if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5000)
