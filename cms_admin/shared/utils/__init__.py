"""Shared utilities: datetime and id generation."""

from cms_admin.shared.utils.datetime import ensure_utc, utc_now
from cms_admin.shared.utils.ids import generate_id

__all__ = ["ensure_utc", "generate_id", "utc_now"]
