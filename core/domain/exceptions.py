"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every exception carries a
machine-readable error type, a human-readable message, and details
telling the caller what to do next.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    error_type = "DomainError"

    def __init__(self, message: str, details: str = "", code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            details: Guidance on how to resolve the error
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.error_type


class NotFoundError(DomainException):
    """Base exception for entities that could not be resolved."""

    error_type = "NotFound"


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application is not found."""

    def __init__(
        self,
        message: str = "Application could not be found.",
        details: str = (
            "Please verify the provided ID is correct. If correct, the application "
            "might have been deleted or does not exist."
        ),
    ):
        super().__init__(message, details)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(
        self,
        message: str = "License could not be found.",
        details: str = (
            "Please verify the provided ID is correct. If correct, the license "
            "might have been deleted or does not exist."
        ),
    ):
        super().__init__(message, details)


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(
        self,
        message: str = "User could not be found.",
        details: str = (
            "Please verify the provided ID is correct. If correct, the user "
            "might have been deleted or does not exist."
        ),
    ):
        super().__init__(message, details)


class UpdateConflictError(DomainException):
    """Raised when a write carries a stale modification timestamp."""

    error_type = "UpdateConflict"

    def __init__(self, entity: str = "record"):
        super().__init__(
            f"Failed to update {entity} because of data conflict.",
            (
                f"{entity.capitalize()} data may have been modified since it was last "
                "retrieved. Please retrieve the latest version and try again."
            ),
        )


class DataDeletionError(DomainException):
    """Raised when a deletion would break a referential precondition."""

    error_type = "DataDeletionError"


class InvalidQueryError(DomainException):
    """Raised when a license query cannot be interpreted."""

    error_type = "ValidationError"
