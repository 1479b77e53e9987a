"""Domain-specific exceptions. Pure domain layer, no infrastructure or HTTP."""


class DomainError(Exception):
    """Base for all domain-layer errors. `code` is the stable tag callers switch on."""

    code = "domain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when input fields are missing or malformed."""

    code = "invalid_input"


class AmendmentNotFoundError(DomainError):
    """Raised when a shipment or amendment is absent or not visible to the caller."""

    code = "not_found"


class InvalidStatusTransitionError(DomainError):
    """Raised when the requested action is not legal for the amendment's current status."""

    code = "invalid_transition"
