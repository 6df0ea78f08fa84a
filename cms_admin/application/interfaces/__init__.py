"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from cms_admin.infrastructure or cms_admin.api.
"""

from cms_admin.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    IRoleRepository,
    IUserRoleRepository,
)

__all__ = [
    "IPermissionRepository",
    "IRolePermissionRepository",
    "IRoleRepository",
    "IUserRoleRepository",
]
