"""
APIs REST
"""
from .auth import bp as auth_bp
from .commissions import bp as commissions_bp
from .seller_rates import bp as seller_rates_bp
from .sales import bp as sales_bp

__all__ = [
    "auth_bp",
    "commissions_bp",
    "seller_rates_bp",
    "sales_bp",
]
