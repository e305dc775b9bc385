"""
Modelo: Venta
Una transacción en un local. total_amount es el valor autoritativo
"""
from datetime import datetime
from ..db import db


class Sale(db.Model):
    __tablename__ = "sales"

    id = db.Column(db.Integer, primary_key=True)
    location_id = db.Column(db.Integer, db.ForeignKey("locations.id"), nullable=False)
    
    # USD | SRD
    currency = db.Column(db.String(3), nullable=False, default="USD")
    
    total_amount = db.Column(db.Float, nullable=False)
    
    # Tasa de cambio al momento de la venta (null = dato incompleto)
    exchange_rate = db.Column(db.Float, nullable=True)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    location = db.relationship("Location", backref="sales")

    def to_dict(self):
        return {
            "id": self.id,
            "location_id": self.location_id,
            "location_name": self.location.name if self.location else None,
            "currency": self.currency,
            "total_amount": self.total_amount,
            "exchange_rate": self.exchange_rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
