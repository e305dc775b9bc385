"""
Modelo: Tasa de cambio
Historial; la fila más reciente es la tasa vigente
"""
from datetime import datetime
from ..db import db


class ExchangeRate(db.Model):
    __tablename__ = "exchange_rates"

    id = db.Column(db.Integer, primary_key=True)
    from_currency = db.Column(db.String(3), nullable=False, default="USD")
    to_currency = db.Column(db.String(3), nullable=False, default="SRD")
    rate = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            "rate": self.rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
