"""Application layer: DTOs, repository ports and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""
