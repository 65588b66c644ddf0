"""
Application-wide constants.

Menu choices, confirmation answers and column limits live here so the
shell, the models and the tests agree on them.
"""

from enum import IntEnum


# ========================================
# Menu Choices
# ========================================

class MenuChoice(IntEnum):
    """
    Numbered entries of the interactive menu.

    Usage:
        choice = MenuChoice(2)
        print(choice.label)  # "View All Employees"
    """

    ADD = 1
    LIST = 2
    VIEW = 3
    UPDATE = 4
    DELETE = 5
    SEARCH = 6
    BULK_UPDATE = 7
    INFO = 8
    EXIT = 9

    @property
    def label(self) -> str:
        return MENU_LABELS[self]


MENU_LABELS = {
    MenuChoice.ADD: "➕ Add New Employee",
    MenuChoice.LIST: "👥 View All Employees",
    MenuChoice.VIEW: "🔍 View Employee by ID",
    MenuChoice.UPDATE: "✏️  Update Employee",
    MenuChoice.DELETE: "🗑️  Delete Employee",
    MenuChoice.SEARCH: "🔎 Search by Department",
    MenuChoice.BULK_UPDATE: "💰 Bulk Salary Update",
    MenuChoice.INFO: "📊 Database Information",
    MenuChoice.EXIT: "🚪 Exit",
}


# ========================================
# Confirmation
# ========================================

CONFIRM_ANSWERS = frozenset({"yes", "y"})


# ========================================
# Column Limits
# ========================================

NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
DEPARTMENT_MAX_LENGTH = 50
SALARY_PRECISION = 10
SALARY_SCALE = 2
