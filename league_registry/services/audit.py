"""Append-only audit trail for registration lifecycle events."""

import json
from typing import Any

from sqlalchemy.orm import Session

from league_registry.models.audit_log import AuditLog


def record_event(
    db: Session, event_type: str, entity_id: int | None, **details: Any
) -> AuditLog:
    """Add an audit row to the current unit of work. The caller commits."""
    entry = AuditLog(
        event_type=event_type,
        entity_id=entity_id,
        details=json.dumps(details, default=str, sort_keys=True),
    )
    db.add(entry)
    return entry
