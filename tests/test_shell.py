"""
Test Suite for the interactive shell
Menu actions driven by scripted input
"""
import builtins
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from emdb.cli.shell import EmployeeShell, main


def scripted(*answers):
    """input() replacement that replays answers, then signals end of input"""
    remaining = iter(answers)

    def _input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return _input


@pytest.fixture
def run_shell(repository, engine):
    def _run(*answers):
        EmployeeShell(repository, engine=engine, input_func=scripted(*answers)).run()
    return _run


# ============================================================================
# Menu Loop
# ============================================================================

class TestMenuLoop:
    """Test menu dispatch and exit"""

    def test_exit(self, run_shell, capsys):
        run_shell("9")
        out = capsys.readouterr().out
        assert "EMPLOYEE MANAGEMENT MENU" in out
        assert "Thank you" in out

    def test_end_of_input_exits(self, run_shell, capsys):
        run_shell()
        assert "Thank you" in capsys.readouterr().out

    def test_invalid_choice(self, run_shell, capsys):
        run_shell("42", "9")
        assert "Invalid choice" in capsys.readouterr().out

    def test_non_numeric_choice_is_reprompted(self, run_shell, capsys):
        run_shell("two", "9")
        assert "Please enter a valid number" in capsys.readouterr().out


# ============================================================================
# Menu Actions
# ============================================================================

class TestAddEmployee:
    """Test the add action"""

    def test_add_reprompts_invalid_salary(self, run_shell, repository, capsys):
        run_shell("1", "John", "Smith", "john@example.com", "Sales", "lots", "60000", "2023-05-01", "9")

        out = capsys.readouterr().out
        assert "Please enter a valid number" in out
        assert "Employee added successfully with ID: 1" in out

        employee = repository.read_by_id(1)
        assert employee.full_name == "John Smith"
        assert employee.salary == Decimal("60000.00")
        assert employee.hire_date == date(2023, 5, 1)

    def test_add_defaults_hire_date_to_today(self, run_shell, repository):
        run_shell("1", "John", "Smith", "john@example.com", "Sales", "60000", "", "9")
        assert repository.read_by_id(1).hire_date == date.today()

    def test_add_duplicate_email(self, run_shell, repository, make_employee, capsys):
        repository.create(make_employee(email="taken@example.com"))

        run_shell("1", "John", "Smith", "taken@example.com", "Sales", "60000", "", "9")

        assert "Could not add employee" in capsys.readouterr().out
        assert repository.count() == 1

    def test_add_blank_name(self, run_shell, repository, capsys):
        run_shell("1", "", "Smith", "john@example.com", "Sales", "60000", "", "9")

        assert "Error adding employee" in capsys.readouterr().out
        assert repository.count() == 0


class TestViewAndSearch:
    """Test list, view and search actions"""

    def test_list_empty(self, run_shell, capsys):
        run_shell("2", "9")
        assert "No employees found in the database." in capsys.readouterr().out

    def test_list(self, run_shell, repository, make_employee, capsys):
        repository.create(make_employee(email="a@example.com"))
        repository.create(make_employee(email="b@example.com"))

        run_shell("2", "9")

        out = capsys.readouterr().out
        assert "Total Employees: 2" in out
        assert "a@example.com" in out and "b@example.com" in out

    def test_view_missing(self, run_shell, capsys):
        run_shell("3", "77", "9")
        assert "No employee found with ID: 77" in capsys.readouterr().out

    def test_search(self, run_shell, repository, make_employee, capsys):
        repository.create(make_employee(email="eng@example.com", department="Engineering"))
        repository.create(make_employee(email="mkt@example.com", department="Marketing"))

        run_shell("6", "Eng", "9")

        out = capsys.readouterr().out
        assert "Found 1 employee(s)" in out
        assert "eng@example.com" in out
        assert "mkt@example.com" not in out


class TestUpdateAndDelete:
    """Test update and delete actions"""

    def test_update_keeps_defaults_on_empty_input(self, run_shell, repository, make_employee, capsys):
        employee = make_employee(first_name="Jane", salary="50000")
        repository.create(employee)

        run_shell("4", str(employee.id), "", "", "new@example.com", "", "not-a-number", "", "9")

        out = capsys.readouterr().out
        assert "keeping current value" in out
        assert "Employee updated successfully" in out

        loaded = repository.read_by_id(employee.id)
        assert loaded.first_name == "Jane"
        assert loaded.email == "new@example.com"
        assert loaded.salary == Decimal("50000.00")

    def test_delete_confirmed(self, run_shell, repository, make_employee, capsys):
        employee = make_employee()
        repository.create(employee)

        run_shell("5", str(employee.id), "y", "9")

        assert "Employee deleted successfully" in capsys.readouterr().out
        assert repository.read_by_id(employee.id) is None

    def test_delete_cancelled(self, run_shell, repository, make_employee, capsys):
        employee = make_employee()
        repository.create(employee)

        run_shell("5", str(employee.id), "no", "9")

        assert "Deletion cancelled" in capsys.readouterr().out
        assert repository.read_by_id(employee.id) is not None


class TestBulkSalaryUpdate:
    """Test the bulk salary action"""

    def test_confirmed(self, run_shell, repository, make_employee, capsys):
        employee = make_employee(department="Sales", salary="40000")
        repository.create(employee)

        run_shell("7", "Sales", "10", "yes", "9")

        assert "Salary updated for 1 employees in Sales department" in capsys.readouterr().out
        assert repository.read_by_id(employee.id).salary == Decimal("44000.00")

    def test_cancelled(self, run_shell, repository, make_employee, capsys):
        employee = make_employee(department="Sales", salary="40000")
        repository.create(employee)

        run_shell("7", "Sales", "10", "n", "9")

        assert "Bulk update cancelled" in capsys.readouterr().out
        assert repository.read_by_id(employee.id).salary == Decimal("40000.00")


class TestDatabaseInfo:
    """Test the database information action"""

    def test_info(self, run_shell, capsys):
        run_shell("8", "9")
        out = capsys.readouterr().out
        assert "Database Product: sqlite" in out
        assert "Connection URL: sqlite:///:memory:" in out


# ============================================================================
# Entry Point
# ============================================================================

class TestMain:
    """Test main() startup against a file database"""

    def test_main_creates_table_and_exits(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(builtins, "input", scripted("9"))

        code = main(["--database-url", f"sqlite:///{tmp_path}/employees.db"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Database connection successful" in out
        assert "Employee table ready" in out
        assert (tmp_path / "employees.db").exists()

    def test_main_reports_connection_failure(self, tmp_path, monkeypatch, capsys):
        # A directory cannot be opened as a database file
        monkeypatch.setattr(builtins, "input", scripted("9"))

        code = main(["--database-url", f"sqlite:///{tmp_path}"])

        assert code == 1
        assert "Database connection failed" in capsys.readouterr().out


# ============================================================================
# Out-of-Range Input
# ============================================================================

class TestOutOfRangeInput:
    """Huge numbers are reported, not raised"""

    def test_view_with_oversized_id(self, run_shell, capsys):
        run_shell("3", "99999999999999999999", "9")

        out = capsys.readouterr().out
        assert "No employee found with ID: 99999999999999999999" in out
        assert "Thank you" in out

    def test_delete_with_oversized_id(self, run_shell, capsys):
        run_shell("5", "99999999999999999999", "9")
        assert "No employee found" in capsys.readouterr().out

    def test_bulk_update_with_overflowing_percent(self, run_shell, repository, make_employee, capsys):
        employee = make_employee(department="Sales", salary="40000")
        repository.create(employee)

        run_shell("7", "Sales", "1e999999999", "yes", "9")

        out = capsys.readouterr().out
        assert "Bulk salary update failed" in out
        assert "Thank you" in out
        assert repository.read_by_id(employee.id).salary == Decimal("40000.00")


class TestMainStartupErrors:
    """Test main() argument validation and table creation failures"""

    def test_unknown_log_level_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "chatty"])
        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_is_case_insensitive(self, tmp_path, monkeypatch):
        monkeypatch.setattr(builtins, "input", scripted("9"))
        assert main(["--database-url", f"sqlite:///{tmp_path}/employees.db", "--log-level", "debug"]) == 0

    def test_table_creation_failure_is_reported(self, tmp_path, monkeypatch, capsys):
        def refuse(engine_instance=None):
            raise OperationalError("CREATE TABLE employees", {}, Exception("permission denied"))

        monkeypatch.setattr("emdb.cli.shell.create_all_tables", refuse)
        monkeypatch.setattr(builtins, "input", scripted("9"))

        code = main(["--database-url", f"sqlite:///{tmp_path}/employees.db"])

        assert code == 1
        assert "Error creating table" in capsys.readouterr().out
