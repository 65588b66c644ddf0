"""Interactive console front end."""

from emdb.cli.shell import EmployeeShell, main

__all__ = [
    "EmployeeShell",
    "main",
]
