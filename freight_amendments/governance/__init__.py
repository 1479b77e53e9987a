"""Governance: transition authority and audit logging. No FastAPI."""

from freight_amendments.governance.audit_logger import AuditLogger
from freight_amendments.governance.audit_models import AuditRecord
from freight_amendments.governance.transition_authority import TransitionAuthority, next_status

__all__ = [
    "AuditLogger",
    "AuditRecord",
    "TransitionAuthority",
    "next_status",
]
