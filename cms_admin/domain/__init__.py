"""Domain layer: exceptions.

No dependencies on infrastructure or presentation.
"""

from cms_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleException,
    CmsException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "BusinessRuleException",
    "CmsException",
    "DuplicateAssignmentException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
