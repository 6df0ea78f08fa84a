"""Domain exceptions for the CMS admin application.

Defines domain-level exceptions that represent business rule violations and
lookup failures. These exceptions are independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CmsException(Exception):
    """Base exception for all CMS admin errors.

    Attributes:
        message: Human-readable error description (safe to show to end users).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable error body (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class BusinessRuleException(CmsException):
    """Raised when an operation violates a business rule (e.g. deleting a system permission).

    The message is shown to the end user as-is.
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "BUSINESS_RULE_VIOLATION", details)


class ValidationException(CmsException):
    """Raised when input validation fails (e.g. empty name, unknown module)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CmsException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CmsException):
    """Raised when the caller lacks the permission required for the operation."""

    def __init__(
        self,
        permission: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the missing permission name.

        Args:
            permission: Permission name that was required (e.g. 'manage_roles').
            message: Human-readable message; replaced when permission is given.
        """
        if permission:
            message = f"Permission denied: {permission} required"
        details = {"permission": permission} if permission else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CmsException):
    """Raised when a mutation targets a resource that does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'Role', 'Permission').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateAssignmentException(CmsException):
    """Raised when a unique constraint on a name or assignment is violated."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description (e.g. 'Role name already exists').
            assignment_type: 'permission', 'role', 'user_role' or 'role_permission'.
            details_extra: Optional extra keys (e.g. role_id, permission_id).
        """
        details = dict(details_extra or {})
        details["assignment_type"] = assignment_type
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class SqlNotConfiguredException(CmsException):
    """Raised when an operation requires the database but no engine is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
