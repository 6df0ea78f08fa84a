"""Security: bearer token issue and verification."""

from cms_admin.infrastructure.security.jwt import (
    context_from_token,
    create_access_token,
    verify_token,
)

__all__ = ["context_from_token", "create_access_token", "verify_token"]
