"""Department endpoints"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ems_api.auth import Permission, require_permission
from ems_api.database import get_db
from ems_api.schemas import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    ErrorResponse,
)
from ems_api.services import DepartmentService

router = APIRouter(prefix="/api/v1/departments", tags=["Departments"])


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=201,
    summary="Create Department",
    description="Create a department inside an existing company.",
    responses={404: {"model": ErrorResponse, "description": "Company not found"}},
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_CREATE))],
)
async def create_department(department: DepartmentCreate, db: Session = Depends(get_db)):
    created = DepartmentService(db).create_department(
        company_id=str(department.company_id),
        department_name=department.department_name,
        description=department.description,
    )
    return DepartmentResponse.model_validate(created)


@router.get(
    "",
    response_model=list[DepartmentResponse],
    summary="List Departments",
    description="Get all departments with employee count.",
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_VIEW))],
)
async def list_departments(
    search: Optional[str] = Query(None, description="Search by department name"),
    db: Session = Depends(get_db),
):
    departments = DepartmentService(db).list_departments(search)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.get(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Get Department",
    responses={404: {"model": ErrorResponse, "description": "Department not found"}},
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_VIEW))],
)
async def get_department(department_id: UUID, db: Session = Depends(get_db)):
    department = DepartmentService(db).get_department(str(department_id))
    return DepartmentResponse.model_validate(department)


@router.patch(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Update Department",
    description="Update a department. Its company cannot be changed.",
    responses={
        400: {"model": ErrorResponse, "description": "Attempt to change the company"},
        404: {"model": ErrorResponse, "description": "Department not found"},
    },
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_UPDATE))],
)
async def update_department(
    department_id: UUID,
    updates: DepartmentUpdate,
    db: Session = Depends(get_db),
):
    department = DepartmentService(db).update_department(
        str(department_id), updates.model_dump(exclude_unset=True)
    )
    return DepartmentResponse.model_validate(department)


@router.delete(
    "/{department_id}",
    status_code=204,
    summary="Delete Department",
    description="Delete a department. Its employees are kept without a department.",
    responses={404: {"model": ErrorResponse, "description": "Department not found"}},
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_DELETE))],
)
async def delete_department(department_id: UUID, db: Session = Depends(get_db)):
    DepartmentService(db).delete_department(str(department_id))
