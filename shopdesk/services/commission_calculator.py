"""
Cálculo de montos de comisión

Dos caminos:

- directo: subtotal de la categoría * tasa / 100
- proporcional: cuando la suma de los subtotales de TODOS los items de la
  venta no coincide con el total registrado (más de 0.01 de diferencia), el
  total de la venta se reparte según el peso de la categoría:
  total_venta * (subtotal_categoria / subtotal_items) * tasa / 100

El total de la venta es el valor confiable; los subtotales de items pueden
estar distorsionados por combos o precios especiales.
"""
from decimal import Decimal, ROUND_HALF_UP

from .errors import UndefinedAllocationError

DIRECT = "direct"
PROPORTIONAL = "proportional"

DEFAULT_TOLERANCE = 0.01

CENT = Decimal("0.01")


def round_cents(value):
    """Redondea al centavo, mitades hacia arriba"""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def direct_commission(category_subtotal, rate):
    return round_cents(float(category_subtotal) * (float(rate) / 100))


def proportional_commission(sale_total, category_subtotal, all_items_subtotal, rate):
    if not all_items_subtotal:
        raise UndefinedAllocationError(
            "Sale items subtotal is zero; proportional allocation is undefined"
        )
    proportion = float(category_subtotal) / float(all_items_subtotal)
    return round_cents(float(sale_total) * proportion * (float(rate) / 100))


def exceeds_tolerance(a, b, tolerance=DEFAULT_TOLERANCE):
    """True si a y b difieren en más de la tolerancia (comparado en centavos exactos)"""
    return abs(Decimal(str(a)) - Decimal(str(b))) > Decimal(str(tolerance))


def needs_proportional(sale_total, all_items_subtotal, tolerance=DEFAULT_TOLERANCE):
    """True si los items de la venta no cuadran con su total"""
    return exceeds_tolerance(all_items_subtotal, sale_total, tolerance)


class CommissionCalculation:
    """Resultado de un cálculo: monto redondeado y camino usado"""

    def __init__(self, amount, method, rate, category_subtotal, all_items_subtotal, sale_total):
        self.amount = amount
        self.method = method
        self.rate = rate
        self.category_subtotal = category_subtotal
        self.all_items_subtotal = all_items_subtotal
        self.sale_total = sale_total

    def to_dict(self):
        return {
            "amount": self.amount,
            "method": self.method,
            "rate": self.rate,
            "category_total": self.category_subtotal,
            "sale_items_total": self.all_items_subtotal,
            "sale_total": self.sale_total,
        }


def calculate_commission(sale_total, category_subtotal, all_items_subtotal, rate,
                         tolerance=DEFAULT_TOLERANCE):
    """
    Calcula la comisión de una categoría eligiendo el camino directo o el
    proporcional.

    Args:
        sale_total: Total registrado de la venta (None = usar el subtotal de items)
        category_subtotal: Suma de subtotales de los items de la categoría
        all_items_subtotal: Suma de subtotales de todos los items de la venta
        rate: Porcentaje 0-100

    Raises:
        UndefinedAllocationError: si hace falta el reparto proporcional y
        el subtotal de items es cero
    """
    if sale_total is None:
        sale_total = all_items_subtotal

    if needs_proportional(sale_total, all_items_subtotal, tolerance):
        amount = proportional_commission(sale_total, category_subtotal, all_items_subtotal, rate)
        method = PROPORTIONAL
    else:
        amount = direct_commission(category_subtotal, rate)
        method = DIRECT

    return CommissionCalculation(
        amount=amount,
        method=method,
        rate=float(rate),
        category_subtotal=float(category_subtotal),
        all_items_subtotal=float(all_items_subtotal),
        sale_total=float(sale_total),
    )
