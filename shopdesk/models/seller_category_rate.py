"""
Modelo: Tasa de comisión por vendedor y categoría
Una sola tasa por par (vendedor, categoría)
"""
from datetime import datetime
from ..db import db


class SellerCategoryRate(db.Model):
    __tablename__ = "seller_category_rates"
    __table_args__ = (
        db.UniqueConstraint("seller_id", "category_id", name="uq_seller_category_rate"),
    )

    id = db.Column(db.Integer, primary_key=True)
    seller_id = db.Column(db.Integer, db.ForeignKey("sellers.id"), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False)
    
    # Porcentaje 0-100 (0 es una tasa válida)
    commission_rate = db.Column(db.Float, nullable=False)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    seller = db.relationship("Seller", backref="category_rates")
    category = db.relationship("Category")

    def to_dict(self):
        return {
            "id": self.id,
            "seller_id": self.seller_id,
            "seller_name": self.seller.name if self.seller else None,
            "category_id": self.category_id,
            "category_name": self.category.name if self.category else None,
            "commission_rate": self.commission_rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
