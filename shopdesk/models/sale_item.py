"""
Modelo: Item de venta
subtotal es el valor registrado (puede diferir de quantity * unit_price
por precios especiales o combos)
"""
from ..db import db


class SaleItem(db.Model):
    __tablename__ = "sale_items"

    id = db.Column(db.Integer, primary_key=True)
    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)
    subtotal = db.Column(db.Float, nullable=False)

    sale = db.relationship("Sale", backref=db.backref("items", order_by="SaleItem.id"))
    product = db.relationship("Product")

    @property
    def category_id(self):
        return self.product.category_id if self.product else None

    def to_dict(self):
        return {
            "id": self.id,
            "sale_id": self.sale_id,
            "product_id": self.product_id,
            "name": self.product.name if self.product else None,
            "category_id": self.category_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "subtotal": self.subtotal,
        }
