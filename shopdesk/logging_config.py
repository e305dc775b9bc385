"""
Configuración de logging
Archivos rotativos para la app, errores y auditoría de comisiones
"""
import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(app):
    """Configura logging estructurado para la aplicación"""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
    )

    # Logger raíz del paquete: servicios y blueprints usan logging.getLogger(__name__)
    package_logger = logging.getLogger("shopdesk")
    package_logger.setLevel(level)

    # Logger de auditoría (cambios de comisiones, pagos, tasas)
    audit_logger = logging.getLogger("shopdesk.audit")
    audit_logger.setLevel(logging.INFO)

    app.logger.setLevel(level)

    if not app.config.get("LOG_TO_FILE", True):
        return

    log_dir = app.config.get("LOG_DIR") or os.path.join(app.root_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    # Handler para archivo general de aplicación
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, 'app.log'),
        maxBytes=10485760,  # 10MB
        backupCount=10
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    # Handler para errores
    error_handler = RotatingFileHandler(
        os.path.join(log_dir, 'errors.log'),
        maxBytes=10485760,
        backupCount=10
    )
    error_handler.setFormatter(formatter)
    error_handler.setLevel(logging.ERROR)

    # Handler para auditoría (más retención)
    audit_handler = RotatingFileHandler(
        os.path.join(log_dir, 'audit.log'),
        maxBytes=10485760,
        backupCount=20
    )
    audit_handler.setFormatter(formatter)
    audit_handler.setLevel(logging.INFO)

    for logger in (app.logger, package_logger):
        logger.addHandler(file_handler)
        logger.addHandler(error_handler)

    audit_logger.addHandler(audit_handler)

    app.logger.info('Logging configurado en: %s', log_dir)
