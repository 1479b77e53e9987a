"""Pydantic schemas for the amendment API. Strict validation, no DB or infrastructure."""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_serializer

from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class AmendmentCreateRequest(BaseModel):
    """Client request to amend one of its shipments."""

    shipment_id: str = Field(..., min_length=1, description="Shipment the amendment applies to")
    reason: str = Field(..., description="Free-text justification; must not be blank")
    attachment_ref: Optional[str] = Field(None, max_length=255, description="Reference to an uploaded supporting file")


class AdminDecisionRequest(BaseModel):
    """Admin decision on a pending amendment."""

    action: Literal["approve", "reject", "push"]


class VendorResponseRequest(BaseModel):
    """Winning vendor's answer to an amendment pushed for review."""

    response: Literal["approve", "reject"]
    extra_cost: Optional[Decimal] = Field(
        None, decimal_places=2, description="Monetary delta in currency units; only kept on approve"
    )
    delay_days: Optional[int] = Field(None, description="Schedule delta in days; only kept on approve")
    reason: str = Field(..., description="Vendor note explaining the response")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class AmendmentResponse(BaseModel):
    """Read model for a single amendment."""

    id: str
    shipment_id: str
    requested_by: str
    reason: str
    status: AmendmentStatus
    created_at: datetime
    attachment_ref: Optional[str] = None
    extra_cost: Optional[Decimal] = None
    delay_days: Optional[int] = None
    vendor_note: Optional[str] = None
    vendor_id: Optional[str] = None
    vendor_reply_at: Optional[datetime] = None
    admin_reviewed_by: Optional[str] = None
    admin_reviewed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_serializer("extra_cost")
    def serialize_extra_cost(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None

    @classmethod
    def from_domain(cls, amendment: Amendment) -> "AmendmentResponse":
        return cls.model_validate(amendment)


class AmendmentListResponse(BaseModel):
    """Envelope for role-scoped amendment listings."""

    amendments: List[AmendmentResponse]
