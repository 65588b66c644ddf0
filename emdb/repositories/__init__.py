"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating the shell from SQL.
"""

from emdb.repositories.employee import EmployeeRepository

__all__ = [
    "EmployeeRepository",
]
