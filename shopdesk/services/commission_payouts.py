"""
Pago de comisiones a vendedores

Cada comisión se convierte a la moneda de la billetera usando su propia
moneda registrada.
"""
import logging

from ..db import db
from ..models import Commission, Seller, Wallet, WalletTransaction, Expense
from .activity_log import log_activity
from .commission_calculator import round_cents
from .currency import convert, latest_rate
from .errors import CommissionError, InsufficientFundsError

logger = logging.getLogger(__name__)


def pay_commission(commission_id):
    """Marca una comisión como pagada (sin movimiento de billetera)"""
    commission = db.get_or_404(Commission, commission_id)
    if commission.paid:
        raise CommissionError(f"Commission {commission_id} is already paid")

    commission.paid = True
    log_activity(
        action="pay",
        entity_type="commission",
        entity_id=commission.id,
        entity_name=commission.seller.name if commission.seller else None,
        details=f"Marked commission as paid: {commission.commission_amount} {commission.currency}",
    )
    db.session.commit()
    return commission


def unpaid_total(commissions, currency, exchange_rate):
    """Suma de comisiones convertida a `currency`"""
    total = 0.0
    for commission in commissions:
        total += convert(commission.commission_amount, commission.currency, currency, exchange_rate)
    return round_cents(total)


def pay_unpaid_commissions(seller_id, wallet_id, exchange_rate=None):
    """
    Paga todas las comisiones pendientes de un vendedor desde una billetera

    Descuenta el total de la billetera, registra el movimiento y el gasto.

    Raises:
        CurrencyError: hay que convertir y no hay tasa de cambio
        InsufficientFundsError: saldo insuficiente
    """
    seller = db.get_or_404(Seller, seller_id)
    wallet = db.get_or_404(Wallet, wallet_id)

    unpaid = Commission.query.filter_by(seller_id=seller.id, paid=False).order_by(Commission.id).all()
    if not unpaid:
        return {"paid_count": 0, "total": 0.0, "currency": wallet.currency}

    if exchange_rate is None:
        exchange_rate = latest_rate("USD", "SRD")

    total = unpaid_total(unpaid, wallet.currency, exchange_rate)
    if wallet.balance < total:
        raise InsufficientFundsError(
            f"Insufficient wallet balance. Need {total} {wallet.currency} "
            f"but only have {wallet.balance} {wallet.currency}"
        )

    for commission in unpaid:
        commission.paid = True

    balance_before = wallet.balance
    wallet.balance = round_cents(balance_before - total)

    description = f"Commission payout for {seller.name} ({len(unpaid)} commissions)"
    db.session.add(WalletTransaction(
        wallet_id=wallet.id,
        type="debit",
        amount=total,
        currency=wallet.currency,
        balance_before=balance_before,
        balance_after=wallet.balance,
        description=description,
        reference_type="commission_payout",
        reference_id=str(seller.id),
    ))
    db.session.add(Expense(
        location_id=wallet.location_id,
        category="Commissions",
        description=description,
        amount=total,
        currency=wallet.currency,
        payment_method=wallet.type,
    ))
    log_activity(
        action="pay",
        entity_type="commission",
        entity_id=seller.id,
        entity_name=seller.name,
        details=f"Paid all commissions for {seller.name}: {total} {wallet.currency} ({len(unpaid)} commissions)",
    )
    db.session.commit()

    logger.info("Pago de comisiones: vendedor=%s total=%s %s", seller.id, total, wallet.currency)
    return {
        "paid_count": len(unpaid),
        "commission_ids": [c.id for c in unpaid],
        "total": total,
        "currency": wallet.currency,
        "wallet_balance": wallet.balance,
    }
