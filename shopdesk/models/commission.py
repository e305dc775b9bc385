"""
Modelo: Comisión
Una comisión por (venta, vendedor, categoría). category_key permite que la
restricción única también cubra las comisiones sin categoría.
"""
from datetime import datetime
from sqlalchemy.orm import validates
from ..db import db

UNCATEGORIZED = "uncategorized"


def category_key_for(category_id):
    """Clave de agrupación de una categoría (None = sin categoría)"""
    return UNCATEGORIZED if category_id is None else str(category_id)


class Commission(db.Model):
    __tablename__ = "commissions"
    __table_args__ = (
        db.UniqueConstraint("sale_id", "seller_id", "category_key", name="uq_commission_sale_seller_category"),
    )

    id = db.Column(db.Integer, primary_key=True)
    seller_id = db.Column(db.Integer, db.ForeignKey("sellers.id"), nullable=False)
    location_id = db.Column(db.Integer, db.ForeignKey("locations.id"), nullable=True)
    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False)
    
    # Null = sin categoría
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    category_key = db.Column(db.String(32), nullable=False, default=UNCATEGORIZED)
    
    commission_amount = db.Column(db.Float, nullable=False)
    
    # Moneda de la venta; nunca se deduce del monto
    currency = db.Column(db.String(3), nullable=False)
    
    paid = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    seller = db.relationship("Seller", backref="commissions")
    sale = db.relationship("Sale", backref="commissions")
    category = db.relationship("Category")
    location = db.relationship("Location")

    @validates("category_id")
    def _sync_category_key(self, key, category_id):
        self.category_key = category_key_for(category_id)
        return category_id

    def to_dict(self):
        return {
            "id": self.id,
            "seller_id": self.seller_id,
            "seller_name": self.seller.name if self.seller else None,
            "location_id": self.location_id,
            "sale_id": self.sale_id,
            "category_id": self.category_id,
            "category_name": self.category.name if self.category else None,
            "commission_amount": self.commission_amount,
            "currency": self.currency,
            "paid": self.paid,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
