"""
Modelo: Producto
Artículo vendible o combo (paquete de otros productos), con precios en USD y SRD
"""
from datetime import datetime
from ..db import db


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    
    # Sin categoría = "uncategorized" para comisiones
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)
    
    is_combo = db.Column(db.Boolean, default=False, nullable=False)
    
    purchase_price_usd = db.Column(db.Float, nullable=True)
    purchase_price_srd = db.Column(db.Float, nullable=True)
    selling_price_usd = db.Column(db.Float, nullable=True)
    selling_price_srd = db.Column(db.Float, nullable=True)
    
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = db.relationship("Category", backref="products")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "category": self.category.name if self.category else None,
            "is_combo": self.is_combo,
            "purchase_price_usd": self.purchase_price_usd,
            "purchase_price_srd": self.purchase_price_srd,
            "selling_price_usd": self.selling_price_usd,
            "selling_price_srd": self.selling_price_srd,
            "active": self.active,
        }
