"""
Interactive Employee Shell
==========================

Numbered menu over the employee repository.

Usage:
    python -m emdb
    python -m emdb --database-url postgresql+psycopg://localhost/employee_db
"""

import argparse
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from emdb.config import settings
from emdb.core.constants import CONFIRM_ANSWERS, MenuChoice
from emdb.database.session import (
    check_connection,
    create_all_tables,
    create_db_engine,
    create_session_factory,
    engine as default_engine,
    get_database_info,
)
from emdb.models.employee import Employee, to_salary
from emdb.repositories.employee import EmployeeRepository

logger = logging.getLogger(__name__)

RULE = "=" * 50
THIN_RULE = "-" * 30


class EmployeeShell:
    """
    Console front end for EmployeeRepository.

    Args:
        repository: Data access object for the employees table
        engine: Engine used for the "Database Information" entry
        input_func: Replacement for input(), used by tests
    """

    def __init__(
        self,
        repository: EmployeeRepository,
        engine: Optional[Engine] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        self.repository = repository
        self.engine = engine or default_engine
        self.input = input_func or input

    # ========================================
    # Main Loop
    # ========================================

    def run(self) -> None:
        """Show the menu until the user exits or input ends."""
        handlers = {
            MenuChoice.ADD: self.add_employee,
            MenuChoice.LIST: self.view_all_employees,
            MenuChoice.VIEW: self.view_employee_by_id,
            MenuChoice.UPDATE: self.update_employee,
            MenuChoice.DELETE: self.delete_employee,
            MenuChoice.SEARCH: self.search_by_department,
            MenuChoice.BULK_UPDATE: self.bulk_salary_update,
            MenuChoice.INFO: self.show_database_info,
        }

        try:
            while True:
                self.show_menu()
                choice = self.prompt_int("Enter your choice: ")
                if choice == MenuChoice.EXIT:
                    break
                try:
                    handler = handlers[MenuChoice(choice)]
                except (KeyError, ValueError):
                    print("❌ Invalid choice. Please try again.")
                    continue
                handler()
        except EOFError:
            print()

        print("👋 Thank you for using the Employee Database Manager!")

    def show_menu(self) -> None:
        print("\n" + RULE)
        print("📋 EMPLOYEE MANAGEMENT MENU")
        print(RULE)
        for choice in MenuChoice:
            print(f"{choice.value}. {choice.label}")
        print(RULE)

    # ========================================
    # Menu Actions
    # ========================================

    def add_employee(self) -> None:
        print("\n➕ ADD NEW EMPLOYEE")
        print(THIN_RULE)

        try:
            employee = Employee(
                first_name=self.prompt_str("First Name: "),
                last_name=self.prompt_str("Last Name: "),
                email=self.prompt_str("Email: "),
                department=self.prompt_str("Department: "),
                salary=self.prompt_decimal("Salary: $"),
                hire_date=self.prompt_date("Hire Date (YYYY-MM-DD) [Press Enter for today]: ", date.today()),
            )
        except ValueError as e:
            print(f"❌ Error adding employee: {e}")
            return

        if self.repository.create(employee):
            print(f"✅ Employee added successfully with ID: {employee.id}")
        else:
            print("❌ Could not add employee (duplicate email or database error).")

    def view_all_employees(self) -> None:
        print("\n👥 ALL EMPLOYEES")
        print("-" * 80)

        employees = self.repository.read_all()
        if not employees:
            print("No employees found in the database.")
            return
        print(f"Total Employees: {len(employees)}\n")
        self._print_employees(employees)

    def view_employee_by_id(self) -> None:
        print("\n🔍 VIEW EMPLOYEE BY ID")
        print(THIN_RULE)

        employee_id = self.prompt_int("Enter Employee ID: ")
        employee = self.repository.read_by_id(employee_id)
        if employee is None:
            print(f"❌ No employee found with ID: {employee_id}")
            return
        print("\nEmployee Details:")
        print(employee)

    def update_employee(self) -> None:
        print("\n✏️ UPDATE EMPLOYEE")
        print(THIN_RULE)

        employee_id = self.prompt_int("Enter Employee ID to update: ")
        employee = self.repository.read_by_id(employee_id)
        if employee is None:
            print(f"❌ No employee found with ID: {employee_id}")
            return

        print(f"Current Details: {employee}")
        print("\nEnter new values (press Enter to keep current value):")

        employee.first_name = self.prompt_str_with_default("First Name", employee.first_name)
        employee.last_name = self.prompt_str_with_default("Last Name", employee.last_name)
        employee.email = self.prompt_str_with_default("Email", employee.email)
        employee.department = self.prompt_str_with_default("Department", employee.department)
        employee.salary = self.prompt_decimal_with_default("Salary", employee.salary)
        employee.hire_date = self.prompt_date(f"Hire Date ({employee.hire_date}): ", employee.hire_date)

        if self.repository.update(employee):
            print("✅ Employee updated successfully!")
        else:
            print(f"❌ Could not update employee with ID: {employee_id}")

    def delete_employee(self) -> None:
        print("\n🗑️ DELETE EMPLOYEE")
        print(THIN_RULE)

        employee_id = self.prompt_int("Enter Employee ID to delete: ")
        employee = self.repository.read_by_id(employee_id)
        if employee is None:
            print(f"❌ No employee found with ID: {employee_id}")
            return

        print(f"Employee to delete: {employee}")
        if not self.confirm("Are you sure you want to delete this employee? (yes/no): "):
            print("❌ Deletion cancelled.")
            return

        if self.repository.delete(employee_id):
            print("✅ Employee deleted successfully!")
        else:
            print(f"❌ Could not delete employee with ID: {employee_id}")

    def search_by_department(self) -> None:
        print("\n🔎 SEARCH BY DEPARTMENT")
        print(THIN_RULE)

        department = self.prompt_str("Enter department name (partial match supported): ")
        employees = self.repository.search_by_department(department)
        if not employees:
            print(f"No employees found in department containing: {department}")
            return
        print(f"Found {len(employees)} employee(s):\n")
        self._print_employees(employees)

    def bulk_salary_update(self) -> None:
        print("\n💰 BULK SALARY UPDATE")
        print(THIN_RULE)

        department = self.prompt_str("Enter department name: ")
        percent = self.prompt_decimal("Enter salary increase percentage: ", allow_negative=True)

        question = f"Confirm salary increase of {percent}% for {department} department? (yes/no): "
        if not self.confirm(question):
            print("❌ Bulk update cancelled.")
            return

        updated = self.repository.bulk_raise_salary(department, percent)
        if updated is None:
            print("❌ Bulk salary update failed; no salaries were changed.")
        else:
            print(f"✅ Salary updated for {updated} employees in {department} department")

    def show_database_info(self) -> None:
        print("\n📊 DATABASE INFORMATION")
        print(THIN_RULE)

        try:
            info = get_database_info(self.engine)
        except SQLAlchemyError as e:
            logger.error("Error retrieving database information: %s", e)
            print(f"❌ Error retrieving database information: {e}")
            return

        print(f"Database Product: {info['product']}")
        print(f"Database Version: {info['version']}")
        print(f"Driver: {info['driver']}")
        print(f"Connection URL: {info['url']}")
        print(f"Username: {info['username'] or '(none)'}")
        print(f"Isolation Level: {info['isolation_level']}")

    # ========================================
    # Input Helpers
    # ========================================

    def prompt_str(self, prompt: str) -> str:
        return self.input(prompt).strip()

    def prompt_str_with_default(self, field_name: str, default: str) -> str:
        value = self.prompt_str(f"{field_name} ({default}): ")
        return value or default

    def prompt_int(self, prompt: str) -> int:
        """Ask until the answer parses as an integer."""
        while True:
            try:
                return int(self.prompt_str(prompt))
            except ValueError:
                print("❌ Please enter a valid number.")

    def prompt_decimal(self, prompt: str, allow_negative: bool = False) -> Decimal:
        """Ask until the answer parses as a number (non-negative salary by default)."""
        while True:
            raw = self.prompt_str(prompt)
            try:
                value = Decimal(raw) if allow_negative else to_salary(raw)
            except (InvalidOperation, ValueError):
                value = None
            if value is not None and value.is_finite():
                return value
            print("❌ Please enter a valid number.")

    def prompt_decimal_with_default(self, field_name: str, default: Decimal) -> Decimal:
        raw = self.prompt_str(f"{field_name} ({default}): ")
        if not raw:
            return default
        try:
            return to_salary(raw)
        except ValueError:
            print(f"❌ Invalid number, keeping current value: {default}")
            return default

    def prompt_date(self, prompt: str, default: date) -> date:
        """Ask for an ISO date; empty input returns ``default``."""
        while True:
            raw = self.prompt_str(prompt)
            if not raw:
                return default
            try:
                return date.fromisoformat(raw)
            except ValueError:
                print("❌ Please enter a date as YYYY-MM-DD.")

    def confirm(self, prompt: str) -> bool:
        return self.prompt_str(prompt).lower() in CONFIRM_ANSWERS

    @staticmethod
    def _print_employees(employees: List[Employee]) -> None:
        for employee in employees:
            print(employee)


# ========================================
# Entry Point
# ========================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(description="Employee Database Manager")
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (default: DATABASE_URL setting)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(logging.getLevelNamesMapping()),
        default=settings.log_level,
        help="Logging level (default: LOG_LEVEL setting)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    engine = create_db_engine(args.database_url) if args.database_url else default_engine

    print("🏢 EMPLOYEE DATABASE MANAGEMENT SYSTEM")
    print(RULE)

    if not check_connection(engine):
        print("❌ Database connection failed.")
        print("Please check DATABASE_URL and the database credentials and try again.")
        return 1

    info = get_database_info(engine)
    print("✅ Database connection successful!")
    print(f"Database: {info['product']}")
    print(f"Version: {info['version']}")

    try:
        create_all_tables(engine)
    except SQLAlchemyError as e:
        logger.error("Error creating table: %s", e)
        print(f"❌ Error creating table: {e}")
        return 1
    print("✅ Employee table ready!")

    repository = EmployeeRepository(create_session_factory(engine))
    EmployeeShell(repository, engine=engine).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
