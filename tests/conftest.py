"""
Pytest Configuration
Provides a fresh in-memory database and repository for each test
"""
import os
from datetime import date

import pytest

# Keep the module-level engine off the filesystem
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from emdb.database.session import create_all_tables, create_db_engine, create_session_factory
from emdb.models import Employee
from emdb.repositories import EmployeeRepository


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope='function')
def engine():
    """In-memory SQLite engine with the employees table created"""
    engine = create_db_engine("sqlite:///:memory:")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope='function')
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture(scope='function')
def repository(session_factory):
    return EmployeeRepository(session_factory)


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def make_employee():
    """Build unsaved employees; keyword arguments override the defaults"""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "first_name": "Jane",
            "last_name": f"Doe{counter['n']}",
            "email": f"jane.doe{counter['n']}@example.com",
            "department": "Engineering",
            "salary": "50000.00",
            "hire_date": date(2024, 1, 15),
        }
        data.update(overrides)
        return Employee(**data)

    return _make
