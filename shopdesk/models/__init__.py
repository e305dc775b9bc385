"""
Modelos de base de datos
"""
from .location import Location
from .category import Category
from .product import Product
from .combo_component import ComboComponent
from .sale import Sale
from .sale_item import SaleItem
from .seller import Seller
from .seller_category_rate import SellerCategoryRate
from .commission import Commission, UNCATEGORIZED, category_key_for
from .user import User
from .wallet import Wallet
from .wallet_transaction import WalletTransaction
from .expense import Expense
from .exchange_rate import ExchangeRate
from .activity_log import ActivityLog

__all__ = [
    "Location",
    "Category",
    "Product",
    "ComboComponent",
    "Sale",
    "SaleItem",
    "Seller",
    "SellerCategoryRate",
    "Commission",
    "UNCATEGORIZED",
    "category_key_for",
    "User",
    "Wallet",
    "WalletTransaction",
    "Expense",
    "ExchangeRate",
    "ActivityLog",
]
