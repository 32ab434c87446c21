"""Repositories layer - Data access abstraction.

Repositories handle all database operations and provide a clean interface
for services to interact with data storage.
"""

from brandshift.repositories.brand import BrandRepository
from brandshift.repositories.project import ProjectRepository

__all__ = [
    "BrandRepository",
    "ProjectRepository",
]
