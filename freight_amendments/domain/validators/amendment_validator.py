"""Validators for amendment input rules. Pure functions, no infrastructure or DB access."""

from decimal import Decimal
from typing import Optional

from freight_amendments.domain.exceptions import DomainValidationError
from freight_amendments.domain.models.amendment import Amendment, AmendmentStatus

# Same precision as the amendments.extra_cost column (NUMERIC(10, 2)).
EXTRA_COST_MAX = Decimal("99999999.99")
CENT = Decimal("0.01")
# Range of the amendments.delay_days column (INTEGER).
DELAY_DAYS_MAX = 2147483647

STATUS_FILTER_ALL = "all"


def validate_reason(reason: Optional[str], field: str = "reason") -> str:
    """Require non-blank free text. Returns the stripped value."""
    if reason is None or not reason.strip():
        raise DomainValidationError(f"{field} must not be empty")
    return reason.strip()


def validate_extra_cost(extra_cost: Optional[Decimal]) -> None:
    if extra_cost is None:
        return
    if not extra_cost.is_finite() or extra_cost < 0:
        raise DomainValidationError(f"extra_cost must be a non-negative amount, got {extra_cost}")
    if extra_cost > EXTRA_COST_MAX:
        raise DomainValidationError(f"extra_cost must not exceed {EXTRA_COST_MAX}")
    if extra_cost != extra_cost.quantize(CENT):
        raise DomainValidationError(f"extra_cost must have at most 2 decimal places, got {extra_cost}")


def validate_delay_days(delay_days: Optional[int]) -> None:
    if delay_days is None:
        return
    if delay_days < 0:
        raise DomainValidationError(f"delay_days must be non-negative, got {delay_days}")
    if delay_days > DELAY_DAYS_MAX:
        raise DomainValidationError(f"delay_days must not exceed {DELAY_DAYS_MAX}")


def validate_vendor_response(
    extra_cost: Optional[Decimal],
    delay_days: Optional[int],
    note: Optional[str],
) -> str:
    """Validate the vendor's response payload. Returns the stripped note."""
    validate_extra_cost(extra_cost)
    validate_delay_days(delay_days)
    return validate_reason(note, field="reason")


def parse_status_filter(
    value: Optional[str],
    default: Optional[AmendmentStatus] = None,
) -> Optional[AmendmentStatus]:
    """
    Turn a query-string status into a filter. None/"" gives the default, "all" disables filtering.
    Raises DomainValidationError for unknown values.
    """
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value == STATUS_FILTER_ALL:
        return None
    try:
        return AmendmentStatus(value)
    except ValueError as e:
        allowed = ", ".join([s.value for s in AmendmentStatus] + [STATUS_FILTER_ALL])
        raise DomainValidationError(f"Unknown status '{value}'; expected one of: {allowed}") from e


def validate_amendment(entity: Amendment) -> None:
    """Check record-level invariants: cost fields present iff accepted."""
    has_impact = entity.extra_cost is not None and entity.delay_days is not None
    no_impact = entity.extra_cost is None and entity.delay_days is None
    if entity.status == AmendmentStatus.ACCEPTED and not has_impact:
        raise DomainValidationError("accepted amendment must carry extra_cost and delay_days")
    if entity.status != AmendmentStatus.ACCEPTED and not no_impact:
        raise DomainValidationError(
            f"extra_cost and delay_days must be empty while status is {entity.status.value}"
        )
