#!/usr/bin/env python3
"""
Script de mantenimiento: recalcular comisiones
Sin argumentos corre el recalculo de todas las comisiones.
Con una venta crea las comisiones faltantes de esa venta.

Uso:
    python scripts/recalculate_commissions.py
    python scripts/recalculate_commissions.py <sale_id> [seller_id]
"""
import sys
from pathlib import Path

# Agregar el directorio padre al path para importar módulos
sys.path.insert(0, str(Path(__file__).parent.parent))

from wsgi import app
from shopdesk.services.commission_backfill import backfill_sale
from shopdesk.services.commission_reconciler import reconcile_commissions
from shopdesk.services.errors import CommissionError


def run_reconciliation():
    report = reconcile_commissions()
    for update in report["updates"]:
        print(
            f"  #{update['id']} venta {update['sale_id']}: "
            f"{update['old_amount']} -> {update['new_amount']} {update['currency']} "
            f"({update['method']}, tasa {update['rate']}%)"
        )
    for skip in report["skipped"]:
        print(f"  omitida #{skip['id']}: {skip['reason']}")
    print(f"Comisiones corregidas: {len(report['updates'])}")
    return True


def run_backfill(sale_id, seller_id=None):
    try:
        report = backfill_sale(sale_id, seller_id=seller_id)
    except CommissionError as e:
        print(f"Error: {e}")
        return False

    for created in report["created"]:
        print(f"  creada categoría {created['category_id']}: {created['commission_amount']} {created['currency']}")
    for skip in report["skipped"]:
        print(f"  omitida categoría {skip['category_id']}: {skip['reason']}")
    print(f"Comisiones creadas: {len(report['created'])}")
    return True


def main(argv):
    with app.app_context():
        if len(argv) > 1:
            seller_id = int(argv[2]) if len(argv) > 2 else None
            return run_backfill(int(argv[1]), seller_id)
        return run_reconciliation()


if __name__ == "__main__":
    success = main(sys.argv)
    sys.exit(0 if success else 1)
