"""SQLAlchemy database models."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship

from ems_api.datetime_utils import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class TimestampMixin:
    """Adds created_at and updated_at columns."""
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class EmployeeStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"
    RESIGNED = "resigned"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class Company(TimestampMixin, Base):
    """Company model. Owns departments and employees."""
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_name = Column(String(100), nullable=False, unique=True, index=True)
    # Counter cache, refreshed when the company is read
    number_of_departments = Column(Integer, nullable=False, default=0)
    number_of_employees = Column(Integer, nullable=False, default=0)

    departments = relationship(
        "Department", back_populates="company", cascade="all, delete-orphan"
    )
    employees = relationship(
        "Employee", back_populates="company", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Company {self.company_name}>"


class Department(TimestampMixin, Base):
    """Department model. Bound to one company for its whole life."""
    __tablename__ = "departments"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_id = Column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    department_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    number_of_employees = Column(Integer, nullable=False, default=0)

    company = relationship("Company", back_populates="departments")
    # No delete cascade: removing a department nulls employees.department_id
    employees = relationship("Employee", back_populates="department")

    def __repr__(self):
        return f"<Department {self.department_name}>"


class Employee(TimestampMixin, Base):
    """Employee model."""
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_id = Column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    department_id = Column(
        String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status = Column(
        Enum(EmployeeStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EmployeeStatus.PENDING,
    )
    employee_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    mobile_number = Column(String(20), nullable=False)
    address = Column(Text, nullable=False)
    designation = Column(String(100), nullable=False)
    salary = Column(Numeric(10, 2), nullable=True)
    hired_on = Column(DateTime, nullable=True)
    days_employed = Column(Integer, nullable=False, default=0)

    company = relationship("Company", back_populates="employees")
    department = relationship("Department", back_populates="employees")

    def __repr__(self):
        return f"<Employee {self.email}>"


class User(TimestampMixin, Base):
    """Account that can log in to the API."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )

    def __repr__(self):
        return f"<User {self.email}>"
