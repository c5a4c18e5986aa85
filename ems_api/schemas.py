"""Pydantic models for request/response validation."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from ems_api.models import EmployeeStatus, UserRole

MOBILE_NUMBER_PATTERN = r"^\+?[1-9]\d{1,14}$"


# --- Company Models ---

class CompanyCreate(BaseModel):
    """Schema for creating a company."""
    company_name: str = Field(..., min_length=2, max_length=100, examples=["Acme Corp"])


class CompanyUpdate(BaseModel):
    """Schema for updating a company (all fields optional)."""
    company_name: Optional[str] = Field(None, min_length=2, max_length=100)


class CompanySummary(BaseModel):
    """Company reference embedded in department and employee responses."""
    id: str
    company_name: str

    model_config = {"from_attributes": True}


class CompanyResponse(CompanySummary):
    """Schema for company response."""
    number_of_departments: int = 0
    number_of_employees: int = 0
    created_at: datetime
    updated_at: datetime


# --- Department Models ---

class DepartmentCreate(BaseModel):
    """Schema for creating a department."""
    company_id: UUID
    department_name: str = Field(..., min_length=2, max_length=100, examples=["Engineering"])
    description: Optional[str] = Field(None, max_length=500)


class DepartmentUpdate(BaseModel):
    """Schema for updating a department (all fields optional).

    company_id is accepted only so that an attempt to move the department
    can be rejected explicitly.
    """
    company_id: Optional[UUID] = None
    department_name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class DepartmentSummary(BaseModel):
    """Department reference embedded in employee responses."""
    id: str
    department_name: str

    model_config = {"from_attributes": True}


class DepartmentResponse(DepartmentSummary):
    """Schema for department response."""
    company_id: str
    description: Optional[str] = None
    number_of_employees: int = 0
    company: Optional[CompanySummary] = None
    created_at: datetime
    updated_at: datetime


# --- Employee Models ---

class EmployeeBase(BaseModel):
    """Base employee fields."""
    employee_name: str = Field(..., min_length=2, max_length=100, examples=["Ana Silva"])
    email: EmailStr = Field(..., examples=["ana@company.com"])
    mobile_number: str = Field(..., pattern=MOBILE_NUMBER_PATTERN, examples=["+4915112345678"])
    address: str = Field(..., min_length=5, max_length=500)
    designation: str = Field(..., min_length=2, max_length=100, examples=["HR Manager"])
    salary: Optional[Decimal] = Field(None, gt=0, decimal_places=2, examples=[5000.00])
    hired_on: Optional[datetime] = None


class EmployeeCreate(EmployeeBase):
    """Schema for creating an employee."""
    company_id: UUID
    department_id: Optional[UUID] = None
    status: EmployeeStatus = EmployeeStatus.PENDING


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee (all fields optional)."""
    company_id: Optional[UUID] = None
    department_id: Optional[UUID] = None
    status: Optional[EmployeeStatus] = None
    employee_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    mobile_number: Optional[str] = Field(None, pattern=MOBILE_NUMBER_PATTERN)
    address: Optional[str] = Field(None, min_length=5, max_length=500)
    designation: Optional[str] = Field(None, min_length=2, max_length=100)
    salary: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    hired_on: Optional[datetime] = None


class EmployeeStatusUpdate(BaseModel):
    """Schema for the status-only update."""
    status: EmployeeStatus


class EmployeeResponse(EmployeeBase):
    """Schema for employee response."""
    id: str
    email: str
    company_id: str
    department_id: Optional[str] = None
    status: EmployeeStatus
    days_employed: int = 0
    company: Optional[CompanySummary] = None
    department: Optional[DepartmentSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# --- User / Auth Models ---

class UserCreate(BaseModel):
    """Schema for creating a user account."""
    first_name: str = Field(..., min_length=3, max_length=50)
    last_name: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: UserRole = UserRole.EMPLOYEE

    @field_validator("password")
    @classmethod
    def password_has_letter_and_digit(cls, value: str) -> str:
        if not any(c.isalpha() for c in value) or not any(c.isdigit() for c in value):
            raise ValueError("Password must contain at least one letter and one number")
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes when UTF-8 encoded")
        return value


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""
    id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole
    created_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# --- Health Check ---

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime


# --- Error Models ---

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    code: str
    status_code: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
