"""
Resolución del vendedor de una venta

Con seller_id explícito se valida que exista y pertenezca al local de la
venta. Sin seller_id, el local debe tener exactamente un vendedor: cero o
varios es un error (nunca se elige "el primero").
"""
from ..db import db
from ..models import Seller
from .errors import SellerResolutionError


def sellers_for_location(location_id):
    return Seller.query.filter_by(location_id=location_id).order_by(Seller.id).all()


def resolve_seller(sale, seller_id=None):
    if seller_id is not None:
        seller = db.session.get(Seller, seller_id)
        if seller is None:
            raise SellerResolutionError(f"Seller {seller_id} not found")
        if seller.location_id != sale.location_id:
            raise SellerResolutionError(
                f"Seller {seller_id} does not belong to location {sale.location_id}"
            )
        return seller

    sellers = sellers_for_location(sale.location_id)
    if not sellers:
        raise SellerResolutionError("No seller found for this location")
    if len(sellers) > 1:
        raise SellerResolutionError(
            f"Location {sale.location_id} has {len(sellers)} sellers; seller_id is required"
        )
    return sellers[0]
