"""
Errores del dominio de comisiones
Cada error lleva el código HTTP con el que lo responden las APIs
"""


class CommissionError(Exception):
    status_code = 400


class InvalidRateError(CommissionError):
    pass


class SaleNotFoundError(CommissionError):
    status_code = 404


class SellerResolutionError(CommissionError):
    """No hay vendedor para el local, o hay más de uno y no se indicó cuál"""
    status_code = 404


class DuplicateCommissionError(CommissionError):
    status_code = 409


class UndefinedAllocationError(CommissionError):
    """El reparto proporcional no está definido (subtotal de items en cero)"""
    status_code = 422


class CurrencyError(CommissionError):
    pass


class InsufficientFundsError(CommissionError):
    pass
