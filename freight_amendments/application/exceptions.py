"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    code = "application_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConcurrentModificationError(ApplicationError):
    """Raised when the stored status changed between read and conditional write. Caller should re-read and retry."""

    code = "conflict"


class NotificationFailureError(ApplicationError):
    """Raised by notifiers when publishing to the message broker fails. Never undoes a committed transition."""

    code = "notification_failed"
