"""
Configuración de base de datos
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
