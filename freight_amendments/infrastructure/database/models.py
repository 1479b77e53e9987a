# freight_amendments/infrastructure/database/models.py

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from freight_amendments.infrastructure.database.session import Base


def _uuid_str() -> str:
    return str(uuid.uuid4())


class BaseModel(Base):
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=_uuid_str)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Shipment(BaseModel):
    """Owned by the wider portal; read here for client ownership."""

    __tablename__ = "shipments"

    quote_id = Column(String(36), nullable=True)
    client_id = Column(String, nullable=False, index=True)
    vendor_id = Column(String, nullable=True, index=True)


class Quote(BaseModel):
    """Vendor bid on a shipment. The row with is_winner set decides vendor-side authorization."""

    __tablename__ = "quotes"

    shipment_id = Column(String(36), ForeignKey("shipments.id"), nullable=False, index=True)
    vendor_id = Column(String, nullable=False, index=True)
    is_winner = Column(Boolean, nullable=False, default=False)


class AmendmentRecord(BaseModel):
    """ORM model for amendments. Never deleted; terminal rows are the audit record."""

    __tablename__ = "amendments"

    shipment_id = Column(String(36), ForeignKey("shipments.id"), nullable=False, index=True)
    requested_by = Column(String, nullable=False)
    reason = Column(Text, nullable=False)
    attachment_ref = Column(String(255), nullable=True)
    status = Column(String(32), nullable=False, default="requested", index=True)
    extra_cost = Column(Numeric(10, 2), nullable=True)
    delay_days = Column(Integer, nullable=True)
    vendor_note = Column(Text, nullable=True)
    vendor_id = Column(String, nullable=True)
    vendor_reply_at = Column(DateTime(timezone=True), nullable=True)
    admin_reviewed_by = Column(String, nullable=True)
    admin_reviewed_at = Column(DateTime(timezone=True), nullable=True)


class AmendmentAuditLog(Base):
    """Append-only audit trail of amendment transitions."""

    __tablename__ = "amendment_audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    amendment_id = Column(String(36), nullable=False, index=True)
    shipment_id = Column(String(36), nullable=False)
    actor = Column(String, nullable=False)
    actor_role = Column(String(16), nullable=False)
    action = Column(String(16), nullable=False)
    from_status = Column(String(32), nullable=True)
    to_status = Column(String(32), nullable=False)
    reason = Column(Text, nullable=True)
    correlation_id = Column(String, nullable=False)
    metadata_ = Column("metadata", JSON, nullable=True)
    timestamp_utc = Column(DateTime(timezone=True), nullable=False)
