"""
Configuración de la aplicación
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Directorio base del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent

# Cargar .env desde el directorio del proyecto
load_dotenv(BASE_DIR / '.env')


class Config:
    """Configuración base"""
    
    # Flask
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    TESTING = False
    
    # Database con path absoluto
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or f"sqlite:///{BASE_DIR}/instance/shopdesk.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # Admin inicial (se crea al arrancar si no existe)
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@shopdesk.local")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
    
    # Tokens de sesión
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))
    
    # CORS
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    
    # Comisiones
    COMMISSION_TOLERANCE = float(os.getenv("COMMISSION_TOLERANCE", "0.01"))
    SUPPORTED_CURRENCIES = ("USD", "SRD")
    
    # Logging
    LOG_DIR = os.getenv("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_TO_FILE = True


class DevelopmentConfig(Config):
    """Configuración de desarrollo"""
    DEBUG = True
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


class ProductionConfig(Config):
    """Configuración de producción"""
    DEBUG = False
    SQLALCHEMY_ECHO = False


class TestingConfig(Config):
    """Configuración de tests"""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite://")
    SECRET_KEY = "test-secret-key"
    ADMIN_PASSWORD = None
    LOG_TO_FILE = False


# Mapeo de configuraciones
config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    """Obtiene la configuración según el entorno"""
    env = os.getenv("FLASK_ENV", "development")
    return config_by_name.get(env, DevelopmentConfig)
