"""SQLAlchemy mixins for common model patterns.

Provides: IdMixin, CreatedAuditMixin, ModifiedAuditMixin, SoftDeleteMixin
and the combined AuditedModel used by Role and Permission.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import false, func

from cms_admin.shared.utils.datetime import utc_now
from cms_admin.shared.utils.ids import generate_id


class IdMixin:
    """String primary key defaulting to a new CUID2."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_id)


class CreatedAuditMixin:
    """created_at (UTC) and created_by_user_id."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )

    @declared_attr
    def created_by_user_id(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)


class ModifiedAuditMixin:
    """modified_at and modified_by_user_id; both null until the first change."""

    @declared_attr
    def modified_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), nullable=True)

    @declared_attr
    def modified_by_user_id(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)


class SoftDeleteMixin:
    """is_deleted flag. Soft-deleted rows stay queryable through the recycle bin."""

    @declared_attr
    def is_deleted(cls) -> Mapped[bool]:
        return mapped_column(
            Boolean, nullable=False, default=False, server_default=false(), index=True
        )


class AuditedModel(IdMixin, CreatedAuditMixin, ModifiedAuditMixin, SoftDeleteMixin):
    """Combined mixin: id + created/modified audit + soft delete."""

    __abstract__ = True
