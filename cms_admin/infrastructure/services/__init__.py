"""Infrastructure services that work directly against the database."""

from cms_admin.infrastructure.services.seeder import InitialSystemDataSeeder

__all__ = ["InitialSystemDataSeeder"]
