"""Extension module registry, populated explicitly at startup from configuration."""

from __future__ import annotations

from dataclasses import dataclass

from cms_admin.domain.exceptions import ValidationException
from cms_admin.shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModuleInfo:
    """A registered extension module. name is the value stored in role/assignment module columns."""

    name: str
    display_name: str | None = None


class ModuleRegistry:
    """Known extension modules by name.

    An empty registry accepts any module value; once populated, module values on
    roles and assignments must name a registered module.
    """

    def __init__(self) -> None:
        self._modules: dict[str, ModuleInfo] = {}

    @classmethod
    def from_names(cls, names: list[str]) -> ModuleRegistry:
        registry = cls()
        for name in names:
            registry.register(ModuleInfo(name=name))
        return registry

    def register(self, module: ModuleInfo) -> None:
        if not module.name or not module.name.strip():
            raise ValueError("Module name is required")
        self._modules[module.name] = module
        logger.info("Registered module: %s", module.name)

    def get(self, name: str) -> ModuleInfo | None:
        return self._modules.get(name)

    def list_modules(self) -> list[ModuleInfo]:
        return list(self._modules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def validate(self, module: str | None) -> str | None:
        """Return the trimmed module (None when blank). Raise ValidationException if unknown."""
        value = module.strip() if module else None
        if not value:
            return None
        if self._modules and value not in self._modules:
            raise ValidationException(
                f"Unknown module '{value}'. Registered: {', '.join(self._modules)}",
                field="module",
            )
        return value
