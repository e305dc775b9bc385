"""
Modelo: Componente de combo
Solo se usa para stock; las comisiones se calculan sobre el combo en sí
"""
from ..db import db


class ComboComponent(db.Model):
    __tablename__ = "combo_items"

    id = db.Column(db.Integer, primary_key=True)
    combo_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    combo = db.relationship("Product", foreign_keys=[combo_id], backref="components")
    product = db.relationship("Product", foreign_keys=[product_id])

    def to_dict(self):
        return {
            "id": self.id,
            "combo_id": self.combo_id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "quantity": self.quantity,
        }
