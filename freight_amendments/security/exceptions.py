"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    code = "security_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(SecurityError):
    """Raised when the caller's identity or role cannot be resolved."""

    code = "unauthorized"


class AuthorizationError(SecurityError):
    """Raised when the caller is known but lacks the role or ownership for the action."""

    code = "forbidden"
