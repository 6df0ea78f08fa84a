"""Core: config, constants, module registry and application bootstrap.

Single place for settings and shared constants.
"""

from cms_admin.core.config import get_settings

__all__ = ["get_settings"]
