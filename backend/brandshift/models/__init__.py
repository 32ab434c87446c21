"""Models layer - SQLAlchemy ORM models.

Models define the database schema and relationships.
All models inherit from the Base class defined in core.database.
"""

from brandshift.core.database import Base
from brandshift.models.brand import Brand
from brandshift.models.project import Project
from brandshift.models.user import User

__all__ = [
    "Base",
    "Brand",
    "Project",
    "User",
]
