"""
Employee model.

One row of the ``employees`` table. The identifier is assigned by the
database on insert; email uniqueness is a table constraint, so a duplicate
surfaces as an IntegrityError from storage rather than an application check.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from emdb.core.constants import (
    DEPARTMENT_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SALARY_PRECISION,
    SALARY_SCALE,
)
from emdb.models.base import Base, BaseModel

CENTS = Decimal(1).scaleb(-SALARY_SCALE)


def to_salary(value) -> Decimal:
    """
    Coerce a salary to a two-place Decimal.

    Floats go through str() so 0.1 stays 0.10 instead of its binary expansion.

    Raises:
        ValueError: If the value is not a number or is negative
    """
    try:
        salary = Decimal(str(value).strip())
        if not salary.is_finite():
            raise InvalidOperation
        salary = salary.quantize(CENTS)
    except InvalidOperation:
        raise ValueError(f"Invalid salary: {value!r}") from None
    if salary < 0:
        raise ValueError(f"Salary cannot be negative, got {salary}")
    return salary


class Employee(BaseModel, Base):
    """
    Employee record.

    Attributes:
        id: Auto-incrementing primary key (None until persisted)
        first_name: Given name
        last_name: Family name
        email: Unique contact address
        department: Department name
        salary: Annual salary, two decimal places
        hire_date: Date the employee joined
        created_at: When the row was inserted (from BaseModel)
        updated_at: When the row was last modified (from BaseModel)

    Example:
        employee = Employee(
            first_name="Jane",
            last_name="Doe",
            email="jane.doe@example.com",
            department="Engineering",
            salary="85000",
            hire_date=date(2024, 1, 15),
        )
    """

    __tablename__ = "employees"

    # Load server-side timestamps on insert so detached records stay readable
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, index=True)

    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        unique=True,
        nullable=False
    )

    department: Mapped[str] = mapped_column(
        String(DEPARTMENT_MAX_LENGTH),
        nullable=False,
        index=True
    )

    salary: Mapped[Decimal] = mapped_column(
        Numeric(SALARY_PRECISION, SALARY_SCALE),
        nullable=False
    )

    hire_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = {"comment": "Employee records"}

    # ========================================
    # Validation
    # ========================================

    def __init__(self, **kwargs):
        """
        Initialize an Employee with validation.

        Validates:
        - names, email and department are not blank
        - salary is a non-negative number (stored as Decimal)
        - hire_date is a date or an ISO "YYYY-MM-DD" string

        Raises:
            ValueError: If validation fails
        """
        if "salary" in kwargs:
            kwargs["salary"] = to_salary(kwargs["salary"])
        if isinstance(kwargs.get("hire_date"), str):
            kwargs["hire_date"] = date.fromisoformat(kwargs["hire_date"].strip())

        super().__init__(**kwargs)

        for field in ("first_name", "last_name", "email", "department"):
            value = getattr(self, field)
            if not value or not value.strip():
                raise ValueError(f"Employee {field.replace('_', ' ')} cannot be empty")

        if self.salary is None:
            raise ValueError("Employee salary is required")
        if self.hire_date is None:
            raise ValueError("Employee hire date is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    # ========================================
    # String Representation
    # ========================================

    def __repr__(self) -> str:
        return (
            f"<Employee(id={self.id}, email='{self.email}', "
            f"department='{self.department}')>"
        )

    def __str__(self) -> str:
        """
        Human-readable one-line summary.

        Example output:
            "ID: 1 | Jane Doe | jane.doe@example.com | Engineering | $85000.00 | Hired: 2024-01-15"
        """
        return (
            f"ID: {self.id} | {self.full_name} | {self.email} | "
            f"{self.department} | ${self.salary:.2f} | Hired: {self.hire_date}"
        )
