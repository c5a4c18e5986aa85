"""Company endpoints"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ems_api.auth import Permission, require_permission
from ems_api.database import get_db
from ems_api.schemas import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    DepartmentResponse,
    ErrorResponse,
)
from ems_api.services import CompanyService, DepartmentService

router = APIRouter(prefix="/api/v1/companies", tags=["Companies"])


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=201,
    summary="Create Company",
    description="Create a new company. Company names are unique.",
    responses={409: {"model": ErrorResponse, "description": "Company name already exists"}},
    dependencies=[Depends(require_permission(Permission.COMPANY_CREATE))],
)
async def create_company(company: CompanyCreate, db: Session = Depends(get_db)):
    created = CompanyService(db).create_company(company.company_name)
    return CompanyResponse.model_validate(created)


@router.get(
    "",
    response_model=list[CompanyResponse],
    summary="List Companies",
    description="Get all companies with department and employee counts.",
    dependencies=[Depends(require_permission(Permission.COMPANY_VIEW))],
)
async def list_companies(
    search: Optional[str] = Query(None, description="Search by company name"),
    db: Session = Depends(get_db),
):
    companies = CompanyService(db).list_companies(search)
    return [CompanyResponse.model_validate(c) for c in companies]


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Get Company",
    responses={404: {"model": ErrorResponse, "description": "Company not found"}},
    dependencies=[Depends(require_permission(Permission.COMPANY_VIEW))],
)
async def get_company(company_id: UUID, db: Session = Depends(get_db)):
    company = CompanyService(db).get_company(str(company_id))
    return CompanyResponse.model_validate(company)


@router.get(
    "/{company_id}/departments",
    response_model=list[DepartmentResponse],
    summary="List Company Departments",
    description="Get the departments of one company.",
    responses={404: {"model": ErrorResponse, "description": "Company not found"}},
    dependencies=[Depends(require_permission(Permission.DEPARTMENT_VIEW))],
)
async def list_company_departments(company_id: UUID, db: Session = Depends(get_db)):
    departments = DepartmentService(db).list_company_departments(str(company_id))
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.patch(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Update Company",
    description="Update a company. Only provided fields will be updated.",
    responses={
        404: {"model": ErrorResponse, "description": "Company not found"},
        409: {"model": ErrorResponse, "description": "Company name already exists"},
    },
    dependencies=[Depends(require_permission(Permission.COMPANY_UPDATE))],
)
async def update_company(
    company_id: UUID,
    updates: CompanyUpdate,
    db: Session = Depends(get_db),
):
    company = CompanyService(db).update_company(
        str(company_id), updates.model_dump(exclude_unset=True)
    )
    return CompanyResponse.model_validate(company)


@router.delete(
    "/{company_id}",
    status_code=204,
    summary="Delete Company",
    description="Delete a company with all of its departments and employees.",
    responses={404: {"model": ErrorResponse, "description": "Company not found"}},
    dependencies=[Depends(require_permission(Permission.COMPANY_DELETE))],
)
async def delete_company(company_id: UUID, db: Session = Depends(get_db)):
    CompanyService(db).delete_company(str(company_id))
