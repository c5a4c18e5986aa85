"""Employee endpoints"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ems_api.auth import Permission, require_permission
from ems_api.database import get_db
from ems_api.schemas import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeStatusUpdate,
    EmployeeUpdate,
    ErrorResponse,
)
from ems_api.services import EmployeeService

router = APIRouter(prefix="/api/v1/employees", tags=["Employees"])


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=201,
    summary="Create Employee",
    description="Create a new employee record.",
    responses={
        400: {"model": ErrorResponse, "description": "Department belongs to another company"},
        404: {"model": ErrorResponse, "description": "Company or department not found"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_CREATE))],
)
async def create_employee(employee: EmployeeCreate, db: Session = Depends(get_db)):
    created = EmployeeService(db).create_employee(employee.model_dump())
    return EmployeeResponse.model_validate(created)


@router.get(
    "",
    response_model=list[EmployeeResponse],
    summary="List Employees",
    description="Get all employees, optionally searching name, email, designation or phone.",
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_VIEW))],
)
async def list_employees(
    search: Optional[str] = Query(None, description="Search by name, email, designation or phone"),
    db: Session = Depends(get_db),
):
    employees = EmployeeService(db).list_employees(search)
    return [EmployeeResponse.model_validate(emp) for emp in employees]


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get Employee",
    description="Get a single employee by ID.",
    responses={404: {"model": ErrorResponse, "description": "Employee not found"}},
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_VIEW))],
)
async def get_employee(employee_id: UUID, db: Session = Depends(get_db)):
    employee = EmployeeService(db).get_employee(str(employee_id))
    return EmployeeResponse.model_validate(employee)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update Employee",
    description="Update an existing employee. Only provided fields will be updated.",
    responses={
        400: {"model": ErrorResponse, "description": "Company change or department of another company"},
        404: {"model": ErrorResponse, "description": "Employee or department not found"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_UPDATE))],
)
async def update_employee(
    employee_id: UUID,
    updates: EmployeeUpdate,
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db).update_employee(
        str(employee_id), updates.model_dump(exclude_unset=True)
    )
    return EmployeeResponse.model_validate(employee)


@router.patch(
    "/{employee_id}/status",
    response_model=EmployeeResponse,
    summary="Update Employee Status",
    description="Change the status. Activating an employee without a hire date sets it to now.",
    responses={404: {"model": ErrorResponse, "description": "Employee not found"}},
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_CHANGE_STATUS))],
)
async def update_employee_status(
    employee_id: UUID,
    body: EmployeeStatusUpdate,
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db).update_status(str(employee_id), body.status)
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=204,
    summary="Delete Employee",
    description="Delete an employee by ID.",
    responses={404: {"model": ErrorResponse, "description": "Employee not found"}},
    dependencies=[Depends(require_permission(Permission.EMPLOYEE_DELETE))],
)
async def delete_employee(employee_id: UUID, db: Session = Depends(get_db)):
    EmployeeService(db).delete_employee(str(employee_id))
