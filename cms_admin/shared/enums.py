"""Shared enumerations used by application and infrastructure layers."""

from enum import Enum


class SortDirection(str, Enum):
    """List sort direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> "SortDirection":
        """Return DESC only for 'desc' (any case); everything else sorts ascending."""
        if raw and raw.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


class RoleSortColumn(str, Enum):
    """Sortable role columns."""

    NAME = "name"
    DISPLAY_NAME = "displayname"
    CREATED_AT = "createdat"


class PermissionSortColumn(str, Enum):
    """Sortable permission columns."""

    NAME = "name"
    DISPLAY_NAME = "displayname"
    IS_SYSTEM = "issystem"
