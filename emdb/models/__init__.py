"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from emdb.models.base import Base, BaseModel
from emdb.models.employee import Employee, to_salary

__all__ = [
    "Base",
    "BaseModel",
    "Employee",
    "to_salary",
]
