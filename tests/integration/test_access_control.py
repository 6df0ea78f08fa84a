"""Access-control integration tests on a real (in-memory SQLite) database.

Each test gets a fresh schema; the session is rolled back afterwards.
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.dtos.permission import (
    CreatePermissionRequest,
    UpdatePermissionRequest,
)
from cms_admin.application.dtos.role import CreateRoleRequest, UpdateRoleRequest
from cms_admin.application.services import (
    AuthorizationService,
    PermissionService,
    RolePermissionService,
    RoleService,
    UserRoleService,
)
from cms_admin.domain.exceptions import (
    BusinessRuleException,
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from cms_admin.infrastructure.persistence.models.permission import UserRole
from cms_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)


class Services:
    """All services bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.permission_repo = PermissionRepository(db)
        self.role_repo = RoleRepository(db)
        self.user_role_repo = UserRoleRepository(db)
        self.role_permission_repo = RolePermissionRepository(db)
        self.permissions = PermissionService(self.permission_repo)
        self.roles = RoleService(self.role_repo, self.user_role_repo)
        self.user_roles = UserRoleService(self.user_role_repo, self.role_repo)
        self.role_permissions = RolePermissionService(
            self.role_permission_repo,
            self.role_repo,
            self.permission_repo,
            self.user_role_repo,
        )
        self.authz = AuthorizationService(self.user_role_repo, self.role_permission_repo)


@pytest.fixture
def svc(db_session: AsyncSession) -> Services:
    return Services(db_session)


async def test_system_permission_cannot_be_renamed_or_deleted(svc: Services) -> None:
    perm = await svc.permission_repo.create_permission(
        "manage_users", display_name="Manage Users", is_system=True
    )

    with pytest.raises(BusinessRuleException):
        await svc.permissions.update(
            UpdatePermissionRequest(id=perm.id, name="manage_people"), "admin"
        )
    with pytest.raises(BusinessRuleException):
        await svc.permissions.soft_delete(perm.id, "admin")
    with pytest.raises(BusinessRuleException):
        await svc.permissions.hard_delete(perm.id)

    stored = await svc.permissions.get_by_id(perm.id)
    assert stored is not None
    assert stored.name == "manage_users"
    assert stored.is_deleted is False


async def test_soft_delete_then_restore_keeps_name(svc: Services) -> None:
    perm = await svc.permissions.create(
        CreatePermissionRequest(name="edit_pages", display_name="Edit Pages"), "admin"
    )

    await svc.permissions.soft_delete(perm.id, "admin")
    deleted = await svc.permissions.get_deleted()
    assert [p.id for p in deleted] == [perm.id]
    assert perm.id not in [p.id for p in await svc.permissions.get_all()]
    # Lookups by id still see recycle-bin rows.
    in_bin = await svc.permissions.get_by_id(perm.id)
    assert in_bin is not None and in_bin.is_deleted is True
    assert in_bin.modified_by_user_id == "admin"

    await svc.permissions.restore(perm.id, "editor")
    restored = await svc.permissions.get_by_id(perm.id)
    assert restored is not None
    assert restored.name == "edit_pages"
    assert restored.is_deleted is False
    assert restored.modified_by_user_id == "editor"
    assert await svc.permissions.get_deleted() == []


async def test_restore_unknown_permission_raises_not_found(svc: Services) -> None:
    with pytest.raises(ResourceNotFoundException):
        await svc.permissions.restore("does-not-exist", "admin")


async def test_duplicate_permission_name_rejected(svc: Services) -> None:
    await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    with pytest.raises(ValidationException):
        await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")


async def test_rename_clash_at_flush_raises_duplicate(svc: Services) -> None:
    await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    other = await svc.permissions.create(
        CreatePermissionRequest(name="publish_pages"), "admin"
    )
    entity = await svc.permission_repo.get_entity_by_id(other.id)
    assert entity is not None
    entity.name = "edit_pages"

    with pytest.raises(DuplicateAssignmentException) as exc_info:
        await svc.permission_repo.update_permission(entity)

    assert exc_info.value.details["name"] == "edit_pages"
    assert exc_info.value.details["assignment_type"] == "permission"


async def test_paged_list_excludes_deleted_and_counts_all_matches(svc: Services) -> None:
    ids = {}
    for name in ("page_read", "page_write", "page_admin", "blog_read"):
        created = await svc.permissions.create(CreatePermissionRequest(name=name), "admin")
        ids[name] = created.id
    await svc.permissions.soft_delete(ids["page_admin"], "admin")

    first = await svc.permissions.get_paged_list("PAGE", "name", "asc", 0, 1)
    second = await svc.permissions.get_paged_list("PAGE", "name", "asc", 1, 1)

    assert first.total_count == 2
    assert second.total_count == 2
    assert [p.name for p in first.permissions] == ["page_read"]
    assert [p.name for p in second.permissions] == ["page_write"]


async def test_search_matches_display_name_and_treats_wildcards_literally(
    svc: Services,
) -> None:
    await svc.permissions.create(
        CreatePermissionRequest(name="p1", display_name="Publish 100% of pages"), "admin"
    )
    await svc.permissions.create(
        CreatePermissionRequest(name="p2", display_name="Publish drafts"), "admin"
    )

    by_display = await svc.permissions.get_paged_list("publish", None, None, 0, 20)
    literal = await svc.permissions.get_paged_list("100%", None, None, 0, 20)

    assert by_display.total_count == 2
    assert [p.name for p in literal.permissions] == ["p1"]


async def test_sort_descending_by_name(svc: Services) -> None:
    for name in ("b", "a", "c"):
        await svc.permissions.create(CreatePermissionRequest(name=name), "admin")

    desc = await svc.permissions.get_paged_list(None, "Name", "DESC", 0, 20)
    unknown_column = await svc.permissions.get_paged_list(None, "bogus", None, 0, 20)

    assert [p.name for p in desc.permissions] == ["c", "b", "a"]
    assert [p.name for p in unknown_column.permissions] == ["a", "b", "c"]


async def test_role_paging_and_recycle_bin(svc: Services) -> None:
    for name in ("Authors", "Editors", "Viewers"):
        await svc.roles.create(CreateRoleRequest(name=name), "admin")
    viewers = await svc.roles.get_by_name("Viewers")
    assert viewers is not None
    await svc.roles.soft_delete(viewers.id, "admin")

    page = await svc.roles.get_paged_list(None, "name", "desc", 0, 10)
    assert page.total_count == 2
    assert [r.name for r in page.roles] == ["Editors", "Authors"]
    assert [r.name for r in await svc.roles.get_deleted()] == ["Viewers"]

    await svc.roles.restore(viewers.id, "admin")
    assert (await svc.roles.get_paged_list()).total_count == 3


async def test_db_permission_check_without_roles_is_false(svc: Services) -> None:
    assert await svc.authz.has_permission_async("nobody", "edit_pages") is False
    assert await svc.authz.has_permission_async("nobody", "full_admin_access") is False


async def test_db_permission_check_follows_grants_and_full_admin(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    full_admin = await svc.permission_repo.create_permission(
        "full_admin_access", is_system=True
    )
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")
    admins = await svc.roles.create(CreateRoleRequest(name="Admins"), "admin")
    await svc.role_permissions.assign_permission(editors.id, edit.id, "admin")
    await svc.role_permissions.assign_permission(admins.id, full_admin.id, "admin")
    await svc.user_roles.assign_role("alice", editors.id)
    await svc.user_roles.assign_role("bob", admins.id)

    assert await svc.authz.has_permission_async("alice", "edit_pages") is True
    assert await svc.authz.has_permission_async("alice", "manage_roles") is False
    assert await svc.authz.has_permission_async("bob", "manage_roles") is True
    assert await svc.authz.has_permission_async("bob", "edit_pages") is True


async def test_deleted_permission_or_role_grants_nothing(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")
    await svc.role_permissions.assign_permission(editors.id, edit.id, "admin")
    await svc.user_roles.assign_role("alice", editors.id)

    await svc.permissions.soft_delete(edit.id, "admin")
    assert await svc.authz.has_permission_async("alice", "edit_pages") is False
    assert await svc.role_permissions.get_permission_names_for_user("alice") == []

    await svc.permissions.restore(edit.id, "admin")
    assert await svc.authz.has_permission_async("alice", "edit_pages") is True

    await svc.roles.soft_delete(editors.id, "admin")
    assert await svc.authz.has_permission_async("alice", "edit_pages") is False
    assert await svc.user_roles.get_roles_for_user("alice") == []


async def test_deactivated_role_hidden_from_dropdown_but_assignments_remain(
    svc: Services,
) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    editor = await svc.roles.create(
        CreateRoleRequest(name="Editor", display_name="Editor"), "admin"
    )
    await svc.role_permissions.assign_permission(editor.id, edit.id, "admin")
    await svc.user_roles.assign_role("alice", editor.id)
    assert [r.name for r in await svc.roles.get_all_roles()] == ["Editor"]

    updated = await svc.roles.update(
        UpdateRoleRequest(id=editor.id, display_name="Editor", is_active=False), "admin"
    )

    assert updated.is_active is False
    assert updated.modified_by_user_id == "admin"
    assert await svc.roles.get_all_roles() == []
    assert await svc.roles.get_primary_role_id_for_user("alice") == editor.id
    assert await svc.authz.has_permission_async("alice", "edit_pages") is True


async def test_active_roles_ordered_by_display_order_then_name(svc: Services) -> None:
    await svc.roles.create(CreateRoleRequest(name="Zeta", display_order=1), "admin")
    await svc.roles.create(CreateRoleRequest(name="Alpha"), "admin")
    await svc.roles.create(CreateRoleRequest(name="Omega", display_order=0), "admin")

    names = [r.name for r in await svc.roles.get_all_roles()]
    assert names == ["Omega", "Zeta", "Alpha"]


async def test_primary_role_is_lowest_position(
    svc: Services, db_session: AsyncSession
) -> None:
    first = await svc.roles.create(CreateRoleRequest(name="First"), "admin")
    second = await svc.roles.create(CreateRoleRequest(name="Second"), "admin")
    base = datetime(2024, 1, 1, tzinfo=UTC)
    db_session.add_all(
        [
            UserRole(user_id="carol", role_id=second.id, assigned_at=base, position=1),
            UserRole(
                user_id="carol",
                role_id=first.id,
                assigned_at=base + timedelta(hours=1),
                position=0,
            ),
        ]
    )
    await db_session.flush()

    assert await svc.roles.get_primary_role_id_for_user("carol") == first.id
    roles = await svc.user_roles.get_roles_for_user("carol")
    assert [r.role_name for r in roles] == ["First", "Second"]
    assert await svc.roles.get_primary_role_id_for_user("nobody") is None


async def test_assignment_order_decides_primary_role_regardless_of_timestamps(
    svc: Services, db_session: AsyncSession
) -> None:
    first = await svc.roles.create(CreateRoleRequest(name="First"), "admin")
    second = await svc.roles.create(CreateRoleRequest(name="Second"), "admin")
    await svc.user_roles.assign_role("dave", first.id)
    await svc.user_roles.assign_role("dave", second.id, "CMS")
    base = datetime(2024, 1, 1, tzinfo=UTC)
    await db_session.execute(
        update(UserRole).where(UserRole.role_id == first.id).values(assigned_at=base)
    )
    await db_session.execute(
        update(UserRole)
        .where(UserRole.role_id == second.id)
        .values(assigned_at=base - timedelta(days=1))
    )

    roles = await svc.user_roles.get_roles_for_user("dave")
    assert [(r.role_name, r.position) for r in roles] == [("First", 0), ("Second", 1)]
    assert await svc.roles.get_primary_role_id_for_user("dave") == first.id

    await svc.user_roles.unassign_role("dave", first.id)
    await svc.user_roles.assign_role("dave", first.id)
    assert await svc.roles.get_primary_role_id_for_user("dave") == second.id


async def test_assignments_are_idempotent(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")

    assert await svc.user_roles.assign_role("alice", editors.id) is True
    assert await svc.user_roles.assign_role("alice", editors.id) is False
    assert await svc.user_roles.assign_role("alice", editors.id, "CMS") is True
    assert len(await svc.user_roles.get_roles_for_user("alice")) == 2
    assert len(await svc.user_roles.get_roles_for_user("alice", "CMS")) == 1

    assert await svc.role_permissions.assign_permission(editors.id, edit.id, "admin") is True
    assert await svc.role_permissions.assign_permission(editors.id, edit.id, "admin") is False
    assert len(await svc.role_permissions.get_permissions_for_role(editors.id)) == 1

    assert await svc.user_roles.unassign_role("alice", editors.id) is True
    assert await svc.user_roles.unassign_role("alice", editors.id) is False
    assert await svc.user_roles.user_has_role("alice", editors.id, "CMS") is True

    assert await svc.role_permissions.unassign_permission(editors.id, edit.id) is True
    assert await svc.role_permissions.unassign_permission(editors.id, edit.id) is False


async def test_assign_to_deleted_role_raises_not_found(svc: Services) -> None:
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")
    await svc.roles.soft_delete(editors.id, "admin")
    with pytest.raises(ResourceNotFoundException):
        await svc.user_roles.assign_role("alice", editors.id)


async def test_hard_delete_cascades_assignments(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    publish = await svc.permissions.create(
        CreatePermissionRequest(name="publish_pages"), "admin"
    )
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")
    await svc.role_permissions.assign_permission(editors.id, edit.id, "admin")
    await svc.role_permissions.assign_permission(editors.id, publish.id, "admin")
    await svc.user_roles.assign_role("alice", editors.id)

    await svc.permissions.hard_delete(publish.id)
    assert await svc.permissions.get_by_id(publish.id) is None
    grants = await svc.role_permissions.get_permissions_for_role(editors.id)
    assert [g.permission_name for g in grants] == ["edit_pages"]

    await svc.roles.delete(editors.id)
    assert await svc.roles.get_by_id(editors.id) is None
    assert await svc.user_roles.get_roles_for_user("alice") == []
    assert await svc.role_permission_repo.get_by_role_id(editors.id) == []
    assert await svc.authz.has_permission_async("alice", "edit_pages") is False


async def test_hard_delete_missing_permission_is_noop(svc: Services) -> None:
    await svc.permissions.hard_delete("does-not-exist")


async def test_delete_missing_role_raises_not_found(svc: Services) -> None:
    with pytest.raises(ResourceNotFoundException):
        await svc.roles.delete("does-not-exist")


async def test_system_grant_cannot_be_unassigned(svc: Services) -> None:
    perm = await svc.permission_repo.create_permission("full_admin_access", is_system=True)
    role = await svc.roles.create(CreateRoleRequest(name="Admins"), "admin")
    await svc.role_permissions.assign_permission(
        role.id, perm.id, "system", is_system_permission=True
    )
    with pytest.raises(BusinessRuleException):
        await svc.role_permissions.unassign_permission(role.id, perm.id)


async def test_module_scoped_grants_are_separate(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")

    assert await svc.role_permissions.assign_permission(editors.id, edit.id, "admin") is True
    assert (
        await svc.role_permissions.assign_permission(editors.id, edit.id, "admin", "CMS")
        is True
    )

    assert len(await svc.role_permissions.get_permissions_for_role(editors.id)) == 2
    cms_only = await svc.role_permissions.get_permissions_for_role(editors.id, "CMS")
    assert [g.module for g in cms_only] == ["CMS"]

    assert await svc.role_permissions.unassign_permission(editors.id, edit.id, "CMS") is True
    remaining = await svc.role_permissions.get_permissions_for_role(editors.id)
    assert [g.module for g in remaining] == [None]


async def test_db_permission_check_scoped_to_module(svc: Services) -> None:
    edit = await svc.permissions.create(CreatePermissionRequest(name="edit_pages"), "admin")
    editors = await svc.roles.create(CreateRoleRequest(name="Editors"), "admin")
    await svc.role_permissions.assign_permission(editors.id, edit.id, "admin", "CRM")
    await svc.user_roles.assign_role("alice", editors.id)

    assert await svc.authz.has_permission_async("alice", "edit_pages", "CRM") is True
    assert await svc.authz.has_permission_async("alice", "edit_pages", "CMS") is False
    assert await svc.authz.has_permission_async("alice", "edit_pages") is True

    full_admin = await svc.permission_repo.create_permission(
        "full_admin_access", is_system=True
    )
    await svc.role_permissions.assign_permission(editors.id, full_admin.id, "admin", "CMS")
    assert await svc.authz.has_permission_async("alice", "edit_pages", "CMS") is True
    assert await svc.authz.has_permission_async("alice", "manage_roles", "CRM") is False


async def test_save_changes_commits(svc: Services, db_session: AsyncSession) -> None:
    await svc.permission_repo.create_permission("edit_pages")
    await svc.permission_repo.save_changes()
    await db_session.rollback()

    assert await svc.permissions.get_by_name("edit_pages") is not None
