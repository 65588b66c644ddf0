"""
Tests for database initialization and seeding
"""
import builtins

import pytest

from emdb.database import init_db
from emdb.database.init_db import SAMPLE_EMPLOYEES, initialize_database, main, seed_sample_data


class TestInitializeDatabase:
    """Test initialize_database and seed_sample_data"""

    def test_sample_data_seeded(self, engine, session_factory, repository, capsys):
        initialize_database(sample_data=True, engine_instance=engine, session_factory=session_factory)

        assert repository.count() == len(SAMPLE_EMPLOYEES)
        out = capsys.readouterr().out
        assert f"Employees: {len(SAMPLE_EMPLOYEES)}" in out
        assert "Engineering" in out

    def test_seeding_twice_skips_existing(self, repository, capsys):
        first = seed_sample_data(repository)
        second = seed_sample_data(repository)

        assert len(first) == len(SAMPLE_EMPLOYEES)
        assert second == []
        assert repository.count() == len(SAMPLE_EMPLOYEES)
        assert "already exists" in capsys.readouterr().out

    def test_reset_drops_existing_rows(self, engine, session_factory, repository, make_employee, capsys):
        repository.create(make_employee())

        initialize_database(reset=True, engine_instance=engine, session_factory=session_factory)

        assert repository.count() == 0
        assert "Employees: 0" in capsys.readouterr().out


class TestMain:
    """Test argument parsing and the reset confirmation"""

    @pytest.fixture
    def calls(self, monkeypatch):
        recorded = []
        monkeypatch.setattr(init_db, "initialize_database", lambda **kwargs: recorded.append(kwargs))
        return recorded

    def test_no_arguments(self, calls):
        main([])
        assert calls == [{"reset": False, "sample_data": False}]

    def test_sample_data_flag(self, calls):
        main(["--sample-data"])
        assert calls == [{"reset": False, "sample_data": True}]

    def test_reset_aborted_without_yes(self, calls, monkeypatch, capsys):
        monkeypatch.setattr(builtins, "input", lambda prompt="": "no")

        main(["--reset", "--sample-data"])

        out = capsys.readouterr().out
        assert "WARNING" in out
        assert "Aborted" in out
        assert calls == []

    def test_reset_confirmed(self, calls, monkeypatch):
        monkeypatch.setattr(builtins, "input", lambda prompt="": "YES")

        main(["--reset"])

        assert calls == [{"reset": True, "sample_data": False}]

    def test_unknown_argument_rejected(self, calls):
        with pytest.raises(SystemExit):
            main(["--drop-everything"])
        assert calls == []
