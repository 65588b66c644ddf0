"""Employee Database Manager: console CRUD over an employees table."""

__version__ = "0.1.0"
