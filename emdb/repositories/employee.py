"""
Employee repository.

Translates Employee records to parameterized SQL statements and back.

Every public method runs in its own session from get_db_context(), which
commits on success and rolls back on error. Storage errors never leave this
class: they are logged and turned into a failure signal (False, None or an
empty list) for the caller.
"""

import logging
from decimal import Decimal, DecimalException
from typing import Callable, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from emdb.database.session import get_db_context
from emdb.models.employee import Employee

logger = logging.getLogger(__name__)


def _error_code(error: Exception) -> Optional[str]:
    """Best-effort driver error code (SQLSTATE, MySQL errno or SQLite code name)."""
    orig = getattr(error, "orig", None)
    if orig is None:
        return None
    for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    if orig.args and isinstance(orig.args[0], int):
        return str(orig.args[0])
    return None


def log_storage_error(action: str, error: Exception) -> None:
    """Log a storage error with the driver details SQLAlchemy wraps."""
    orig = getattr(error, "orig", None)
    logger.error(
        "Error %s: %s (driver error: %s, code: %s)",
        action,
        orig if orig is not None else error,
        type(orig).__name__ if orig is not None else type(error).__name__,
        _error_code(error),
    )


class EmployeeRepository:
    """
    Data access for the employees table.

    Example:
        repo = EmployeeRepository()
        employee = Employee(first_name="Jane", ...)
        if repo.create(employee):
            print(employee.id)
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        """
        Args:
            session_factory: Callable returning a new Session. Defaults to
                the application's SessionLocal.
        """
        self.session_factory = session_factory

    def _session(self):
        return get_db_context(self.session_factory)

    # ========================================
    # Create
    # ========================================

    def create(self, employee: Employee) -> bool:
        """
        Insert a new employee and assign its identifier.

        Returns:
            True on success. False on a constraint violation (duplicate
            email) or any other storage error; employee.id stays None.
        """
        try:
            with self._session() as db:
                db.add(employee)
                db.flush()
                new_id = employee.id
            logger.info("Created employee %s (%s)", new_id, employee.email)
            return True
        except IntegrityError as e:
            employee.id = None
            log_storage_error(f"adding employee {employee.email} (constraint violation)", e)
        except SQLAlchemyError as e:
            employee.id = None
            log_storage_error(f"adding employee {employee.email}", e)
        return False

    # ========================================
    # Read
    # ========================================

    def read_all(self) -> List[Employee]:
        """All employees ordered by identifier (empty list on error)."""
        try:
            with self._session() as db:
                return list(db.scalars(select(Employee).order_by(Employee.id)))
        except SQLAlchemyError as e:
            log_storage_error("retrieving employees", e)
            return []

    def read_by_id(self, employee_id: int) -> Optional[Employee]:
        """The employee with this identifier, or None if absent (or on error)."""
        try:
            with self._session() as db:
                return db.get(Employee, employee_id)
        except (SQLAlchemyError, OverflowError) as e:
            log_storage_error(f"retrieving employee {employee_id}", e)
            return None

    def search_by_department(self, substring: str) -> List[Employee]:
        """
        Employees whose department contains ``substring``, ordered by last name.

        The match is a SQL LIKE with % and _ in the input escaped, so case
        sensitivity follows the database (case-insensitive on SQLite and
        MySQL, case-sensitive on PostgreSQL).
        """
        stmt = (
            select(Employee)
            .where(Employee.department.contains(substring, autoescape=True))
            .order_by(Employee.last_name, Employee.id)
        )
        try:
            with self._session() as db:
                return list(db.scalars(stmt))
        except SQLAlchemyError as e:
            log_storage_error(f"searching department '{substring}'", e)
            return []

    def count(self) -> int:
        """Number of employees (0 on error)."""
        try:
            with self._session() as db:
                return db.scalar(select(func.count()).select_from(Employee)) or 0
        except SQLAlchemyError as e:
            log_storage_error("counting employees", e)
            return 0

    # ========================================
    # Update
    # ========================================

    def update(self, employee: Employee) -> bool:
        """
        Replace every field of the row matching employee.id.

        Returns:
            True if a row matched, False if none did or on error
        """
        if employee.id is None:
            logger.warning("Cannot update an employee that was never saved")
            return False

        stmt = (
            update(Employee)
            .where(Employee.id == employee.id)
            .values(
                first_name=employee.first_name,
                last_name=employee.last_name,
                email=employee.email,
                department=employee.department,
                salary=employee.salary,
                hire_date=employee.hire_date,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            with self._session() as db:
                matched = db.execute(stmt).rowcount
        except (SQLAlchemyError, OverflowError) as e:
            log_storage_error(f"updating employee {employee.id}", e)
            return False

        if matched:
            logger.info("Updated employee %s", employee.id)
        else:
            logger.info("No employee found with ID %s", employee.id)
        return matched > 0

    def bulk_raise_salary(self, department: str, percent) -> Optional[int]:
        """
        Raise salaries of everyone in ``department`` by ``percent``.

        Runs as a single transaction: either every matching row is updated
        or, on failure, the transaction is rolled back and none are.

        Args:
            department: Exact department name
            percent: Increase in percent (10 means salary * 1.10)

        Returns:
            Number of rows updated, or None if the update failed
        """
        try:
            factor = 1 + Decimal(str(percent)) / 100
        except DecimalException as e:
            logger.error("Invalid salary increase %r for %s: %r", percent, department, e)
            return None

        stmt = (
            update(Employee)
            .where(Employee.department == department)
            .values(salary=Employee.salary * factor)
            .execution_options(synchronize_session=False)
        )
        try:
            with self._session() as db:
                updated = db.execute(stmt).rowcount
        except (SQLAlchemyError, OverflowError) as e:
            log_storage_error(f"raising salaries in {department} (rolled back)", e)
            return None

        logger.info("Raised salary by %s%% for %d employees in %s", percent, updated, department)
        return updated

    # ========================================
    # Delete
    # ========================================

    def delete(self, employee_id: int) -> bool:
        """
        Delete the employee with this identifier.

        Returns:
            True if a row matched, False if none did or on error
        """
        stmt = (
            delete(Employee)
            .where(Employee.id == employee_id)
            .execution_options(synchronize_session=False)
        )
        try:
            with self._session() as db:
                matched = db.execute(stmt).rowcount
        except (SQLAlchemyError, OverflowError) as e:
            log_storage_error(f"deleting employee {employee_id}", e)
            return False

        if matched:
            logger.info("Deleted employee %s", employee_id)
        else:
            logger.info("No employee found with ID %s", employee_id)
        return matched > 0

