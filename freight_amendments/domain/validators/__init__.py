"""Domain validators. Pure validation functions."""

from freight_amendments.domain.validators.amendment_validator import (
    parse_status_filter,
    validate_amendment,
    validate_delay_days,
    validate_extra_cost,
    validate_reason,
    validate_vendor_response,
)

__all__ = [
    "parse_status_filter",
    "validate_amendment",
    "validate_delay_days",
    "validate_extra_cost",
    "validate_reason",
    "validate_vendor_response",
]
