"""Access-control constants shared across layers."""

# Reserved actor id for seeding, migrations and automated actions. Never a real user.
SYSTEM_USER_ID = "system"

FULL_ADMIN_ACCESS_PERMISSION = "full_admin_access"

# Permission names required by the admin API (seeded as system permissions).
ACCESS_ADMIN_PANEL = "access_admin_panel"
MANAGE_USERS = "manage_users"
MANAGE_ROLES = "manage_roles"
MANAGE_PERMISSIONS = "manage_permissions"
ACCESS_MEMBER_AREA = "access_member_area"

SYSTEM_PERMISSIONS: dict[str, str] = {
    ACCESS_ADMIN_PANEL: "Access Admin Panel",
    MANAGE_USERS: "Manage Users",
    MANAGE_ROLES: "Manage Roles",
    MANAGE_PERMISSIONS: "Manage Permissions",
    ACCESS_MEMBER_AREA: "Access Member Area",
    FULL_ADMIN_ACCESS_PERMISSION: "Full Admin Access",
}

ADMINISTRATORS_ROLE = "Administrators"
MEMBERS_ROLE = "Members"

SYSTEM_ROLES: dict[str, str] = {
    ADMINISTRATORS_ROLE: "System Administrators",
    MEMBERS_ROLE: "Site Members",
}

# JWT claim carrying materialised permission names.
PERMISSIONS_CLAIM = "permissions"
