"""
Conversión entre USD y SRD
La tasa siempre se expresa como SRD por 1 USD
"""
from flask import current_app

from ..models import ExchangeRate
from .errors import CurrencyError


def latest_rate(from_currency="USD", to_currency="SRD"):
    """Tasa vigente (la última registrada), o None si no hay ninguna"""
    row = ExchangeRate.query.filter_by(
        from_currency=from_currency,
        to_currency=to_currency
    ).order_by(ExchangeRate.created_at.desc(), ExchangeRate.id.desc()).first()
    return float(row.rate) if row else None


def convert(amount, from_currency, to_currency, rate=None):
    supported = current_app.config["SUPPORTED_CURRENCIES"]
    for currency in (from_currency, to_currency):
        if currency not in supported:
            raise CurrencyError(f"Unsupported currency: {currency}")

    if from_currency == to_currency:
        return float(amount)

    if rate is None or float(rate) <= 0:
        raise CurrencyError(f"A positive exchange rate is required to convert {from_currency} to {to_currency}")

    if from_currency == "USD":
        return float(amount) * float(rate)
    return float(amount) / float(rate)
