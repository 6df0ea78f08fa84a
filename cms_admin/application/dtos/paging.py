"""Search/sort/page parameters shared by the admin list endpoints."""

from dataclasses import dataclass

from cms_admin.shared.enums import SortDirection


@dataclass(frozen=True)
class ListQuery:
    """Normalised list parameters.

    sort_column is lower-cased; unknown columns fall back to the repository's
    default (name ascending). skip is clamped to >= 0 and take to >= 0.
    """

    search: str | None = None
    sort_column: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    skip: int = 0
    take: int = 20

    @classmethod
    def build(
        cls,
        search: str | None,
        sort_column: str | None,
        sort_direction: str | None,
        skip: int,
        take: int,
    ) -> "ListQuery":
        """Normalise raw caller input (blank search dropped, direction parsed)."""
        term = search.strip() if search else None
        return cls(
            search=term or None,
            sort_column=sort_column.strip().lower() if sort_column else None,
            sort_direction=SortDirection.parse(sort_direction),
            skip=max(skip, 0),
            take=max(take, 0),
        )

    @property
    def descending(self) -> bool:
        return self.sort_direction is SortDirection.DESC
