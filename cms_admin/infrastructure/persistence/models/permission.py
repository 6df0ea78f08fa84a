"""Permission, RolePermission, and UserRole ORM models."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import false, func

from cms_admin.infrastructure.persistence.database import Base
from cms_admin.infrastructure.persistence.models.mixins import (
    AuditedModel,
    CreatedAuditMixin,
    IdMixin,
)
from cms_admin.shared.utils.datetime import utc_now


class Permission(AuditedModel, Base):
    """Permission. Table: permission. Unique slug-like name (e.g. manage_users)."""

    __tablename__ = "permission"

    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    module: Mapped[str | None] = mapped_column(String(64), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    @property
    def label(self) -> str:
        """Display name, falling back to name when empty."""
        return self.display_name or self.name

    def __repr__(self) -> str:
        return f"Permission(id={self.id!r}, name={self.name!r})"


class RolePermission(IdMixin, CreatedAuditMixin, Base):
    """Many-to-many role-permission. Table: role_permission."""

    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
    )
    module: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_system_permission: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        UniqueConstraint(
            "role_id", "permission_id", "module", name="uq_role_permission"
        ),
        Index("ix_role_permission_role", "role_id"),
    )


class UserRole(IdMixin, Base):
    """Many-to-many user-role, optionally scoped to a module. Table: user_role."""

    __tablename__ = "user_role"

    # Opaque id from the identity store; users are not modelled here.
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False
    )
    module: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_system_assigned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )
    # Per-user assignment order; the lowest position is the primary role.
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", "module", name="uq_user_role"),
        Index("ix_user_role_user", "user_id"),
    )
