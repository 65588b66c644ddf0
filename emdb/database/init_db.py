"""
Database initialization and seeding.

This script:
- Creates the employees table
- Optionally adds sample employees for development/testing
- Can reset the database (drop and recreate)

Usage:
    # Create tables
    python -m emdb.database.init_db

    # Reset database (drops all tables and recreates)
    python -m emdb.database.init_db --reset

    # Add sample employees
    python -m emdb.database.init_db --sample-data
"""

import argparse
from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from emdb.database.session import (
    create_all_tables,
    create_session_factory,
    drop_all_tables,
    engine,
)
from emdb.models import Employee
from emdb.repositories.employee import EmployeeRepository


SAMPLE_EMPLOYEES = [
    {
        "first_name": "Alice",
        "last_name": "Johnson",
        "email": "alice.johnson@example.com",
        "department": "Engineering",
        "salary": "95000.00",
        "hire_date": date(2021, 3, 15),
    },
    {
        "first_name": "Bob",
        "last_name": "Smith",
        "email": "bob.smith@example.com",
        "department": "Engineering",
        "salary": "88000.00",
        "hire_date": date(2022, 7, 1),
    },
    {
        "first_name": "Carol",
        "last_name": "Williams",
        "email": "carol.williams@example.com",
        "department": "Marketing",
        "salary": "72000.00",
        "hire_date": date(2020, 11, 2),
    },
    {
        "first_name": "David",
        "last_name": "Brown",
        "email": "david.brown@example.com",
        "department": "Human Resources",
        "salary": "65000.00",
        "hire_date": date(2023, 1, 9),
    },
    {
        "first_name": "Eve",
        "last_name": "Davis",
        "email": "eve.davis@example.com",
        "department": "Finance",
        "salary": "81000.00",
        "hire_date": date(2019, 5, 20),
    },
]


def create_tables(reset: bool = False, engine_instance: Optional[Engine] = None) -> None:
    """
    Create all database tables.

    Args:
        reset: If True, drop existing tables first
        engine_instance: Engine to use (defaults to the application engine)
    """
    engine_instance = engine_instance or engine

    if reset:
        print("🗑️  Dropping existing tables...")
        drop_all_tables(engine_instance)
        print("✅ Tables dropped")

    print("📊 Creating database tables...")
    create_all_tables(engine_instance)
    print("✅ Tables created")


def seed_sample_data(repository: EmployeeRepository) -> List[Employee]:
    """
    Seed sample employees for development and testing.

    Employees whose email already exists are skipped.

    Returns:
        The employees that were actually inserted
    """
    print("\n🌱 Seeding sample employees...")

    existing = {employee.email for employee in repository.read_all()}
    created = []
    for data in SAMPLE_EMPLOYEES:
        if data["email"] in existing:
            print(f"  ⏭️  Employee '{data['email']}' already exists (skipping)")
            continue

        employee = Employee(**data)
        if repository.create(employee):
            created.append(employee)
            print(f"  ✅ {employee}")
        else:
            print(f"  ❌ Could not create '{data['email']}'")

    print("✅ Sample data seeded")
    return created


def print_database_status(repository: EmployeeRepository) -> None:
    """Print current employee count and departments."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    print(f"  Employees: {repository.count()}")

    departments = sorted({employee.department for employee in repository.read_all()})
    if departments:
        print("\n  Departments:")
        for department in departments:
            print(f"    • {department}")

    print("=" * 60)


def initialize_database(
    reset: bool = False,
    sample_data: bool = False,
    engine_instance: Optional[Engine] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add sample employees
        engine_instance: Engine to use (defaults to the application engine)
        session_factory: Session factory for the repository
    """
    engine_instance = engine_instance or engine
    repository = EmployeeRepository(session_factory or create_session_factory(engine_instance))

    print("=" * 60)
    print("🗄️  Database Initialization")
    print("=" * 60)

    create_tables(reset=reset, engine_instance=engine_instance)

    if sample_data:
        seed_sample_data(repository)

    print_database_status(repository)

    print("\n✅ Database initialization complete!")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the employee database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the employees table
  python -m emdb.database.init_db

  # Reset database (drop all tables and recreate)
  python -m emdb.database.init_db --reset

  # Full reset with sample employees
  python -m emdb.database.init_db --reset --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample employees for development/testing"
    )

    args = parser.parse_args(argv)

    if args.reset:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return

    initialize_database(reset=args.reset, sample_data=args.sample_data)


if __name__ == "__main__":
    main()
