"""
Modelo: Gasto
Gastos del local (pagos de comisiones, insumos, etc)
"""
from datetime import datetime
from ..db import db


class Expense(db.Model):
    __tablename__ = "expenses"

    id = db.Column(db.Integer, primary_key=True)
    location_id = db.Column(db.Integer, db.ForeignKey("locations.id"), nullable=True)
    
    # Commissions, Supplies, Other...
    category = db.Column(db.String(50), nullable=False)
    
    amount = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(3), nullable=False)
    payment_method = db.Column(db.String(16), nullable=True)
    
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "location_id": self.location_id,
            "category": self.category,
            "amount": self.amount,
            "currency": self.currency,
            "payment_method": self.payment_method,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
        }
