"""Role ORM model. Name is the stable identity; display_name is presentation only."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import false, true

from cms_admin.infrastructure.persistence.database import Base
from cms_admin.infrastructure.persistence.models.mixins import AuditedModel


class Role(AuditedModel, Base):
    """Role. Table: role. Unique name; optional module scope."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    module: Mapped[str | None] = mapped_column(String(64), nullable=True)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    @property
    def label(self) -> str:
        """Display name, falling back to name when empty."""
        return self.display_name or self.name

    def __repr__(self) -> str:
        return f"Role(id={self.id!r}, name={self.name!r})"
