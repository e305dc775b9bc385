"""
Modelo: Billetera
Caja o cuenta de un local, en una sola moneda
"""
from datetime import datetime
from ..db import db


class Wallet(db.Model):
    __tablename__ = "wallets"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    location_id = db.Column(db.Integer, db.ForeignKey("locations.id"), nullable=True)
    
    # cash | bank
    type = db.Column(db.String(16), nullable=False, default="cash")
    currency = db.Column(db.String(3), nullable=False)
    balance = db.Column(db.Float, nullable=False, default=0.0)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    location = db.relationship("Location")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location_id": self.location_id,
            "type": self.type,
            "currency": self.currency,
            "balance": self.balance,
        }
