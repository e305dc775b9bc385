"""
Registro de actividad administrativa
El registro se agrega a la sesión actual y se confirma junto con la operación
"""
import logging

from ..db import db
from ..models import ActivityLog

audit_logger = logging.getLogger("shopdesk.audit")


def log_activity(action, entity_type, entity_id=None, entity_name=None, details=None):
    entry = ActivityLog(
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        entity_name=entity_name,
        details=details,
    )
    db.session.add(entry)
    audit_logger.info("%s %s %s: %s", action, entity_type, entity_id, details)
    return entry
