"""
Modelo: Vendedor
Asociado a un local, con porcentaje de comisión por defecto
"""
from datetime import datetime
from ..db import db


class Seller(db.Model):
    __tablename__ = "sellers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    location_id = db.Column(db.Integer, db.ForeignKey("locations.id"), nullable=True)
    
    # Porcentaje por defecto (informativo: las comisiones usan tasas por categoría)
    commission_rate = db.Column(db.Float, nullable=False, default=0.0)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    location = db.relationship("Location", backref="sellers")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location_id": self.location_id,
            "commission_rate": self.commission_rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
