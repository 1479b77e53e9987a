"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from freight_amendments.domain.exceptions import (
    AmendmentNotFoundError,
    DomainError,
    DomainValidationError,
    InvalidStatusTransitionError,
)
from freight_amendments.domain.models import Amendment, AmendmentAction, AmendmentStatus
from freight_amendments.domain.schemas import (
    AdminDecisionRequest,
    AmendmentCreateRequest,
    AmendmentListResponse,
    AmendmentResponse,
    VendorResponseRequest,
)

__all__ = [
    "AdminDecisionRequest",
    "Amendment",
    "AmendmentAction",
    "AmendmentCreateRequest",
    "AmendmentListResponse",
    "AmendmentNotFoundError",
    "AmendmentResponse",
    "AmendmentStatus",
    "DomainError",
    "DomainValidationError",
    "InvalidStatusTransitionError",
    "VendorResponseRequest",
]
