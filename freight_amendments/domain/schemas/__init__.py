"""Domain schemas. Request/response and validation."""

from freight_amendments.domain.schemas.amendment import (
    AdminDecisionRequest,
    AmendmentCreateRequest,
    AmendmentListResponse,
    AmendmentResponse,
    VendorResponseRequest,
)

__all__ = [
    "AdminDecisionRequest",
    "AmendmentCreateRequest",
    "AmendmentListResponse",
    "AmendmentResponse",
    "VendorResponseRequest",
]
