"""Persistence models: ORM entities and mixins."""

from cms_admin.infrastructure.persistence.models.mixins import (
    AuditedModel,
    CreatedAuditMixin,
    IdMixin,
    ModifiedAuditMixin,
    SoftDeleteMixin,
)
from cms_admin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from cms_admin.infrastructure.persistence.models.role import Role

__all__ = [
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "IdMixin",
    "CreatedAuditMixin",
    "ModifiedAuditMixin",
    "SoftDeleteMixin",
    "AuditedModel",
]
