"""Department management service"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ems_api.domain import department_counter, ensure_company_unchanged
from ems_api.exceptions import NotFoundError
from ems_api.logger import get_logger
from ems_api.models import Department
from ems_api.services.company_service import CompanyService

logger = get_logger(__name__)


class DepartmentService:
    """Service for managing departments"""

    def __init__(self, db: Session):
        self.db = db
        self.companies = CompanyService(db)

    def _refresh_counter(self, department: Department) -> None:
        department.number_of_employees = department_counter(department.employees)

    def create_department(
        self,
        company_id: str,
        department_name: str,
        description: Optional[str] = None,
    ) -> Department:
        """
        Create a department inside an existing company.

        Resolving the company also refreshes that company's counters; the new
        department shows up in them on the company's next read.

        Raises:
            NotFoundError: If the company does not exist
        """
        company = self.companies.get_company(company_id)

        department = Department(
            company=company,
            department_name=department_name,
            description=description,
            number_of_employees=0,
        )
        self.db.add(department)
        self.db.commit()
        self.db.refresh(department)

        logger.info(
            f"Department created: {department.id} in company {company.id}",
            extra={"department_id": department.id, "company_id": company.id},
        )
        return department

    def list_departments(self, search: Optional[str] = None) -> List[Department]:
        """List departments, optionally filtered by a name substring."""
        query = self.db.query(Department)
        if search:
            query = query.filter(Department.department_name.contains(search, autoescape=True))

        departments = query.order_by(Department.created_at).all()
        for department in departments:
            self._refresh_counter(department)
        self.db.commit()

        return departments

    def get_department(self, department_id: str) -> Department:
        """
        Get department by ID, refreshing and persisting its employee counter.

        Raises:
            NotFoundError: If the department does not exist
        """
        department = self.db.query(Department).filter(Department.id == department_id).first()
        if not department:
            raise NotFoundError(f"Department {department_id} not found")

        self._refresh_counter(department)
        self.db.commit()
        self.db.refresh(department)
        return department

    def list_company_departments(self, company_id: str) -> List[Department]:
        """Departments of one company, with refreshed counters."""
        self.companies.get_company(company_id)

        departments = (
            self.db.query(Department)
            .filter(Department.company_id == company_id)
            .order_by(Department.created_at)
            .all()
        )
        for department in departments:
            self._refresh_counter(department)
        self.db.commit()

        return departments

    def update_department(self, department_id: str, changes: Dict[str, Any]) -> Department:
        """
        Merge the provided fields into the department.

        Raises:
            NotFoundError: If the department does not exist
            BadRequestError: If the update tries to move it to another company
        """
        department = self.get_department(department_id)

        changes = dict(changes)
        requested_company = changes.pop("company_id", None)
        ensure_company_unchanged(
            department.company_id, str(requested_company) if requested_company else None
        )

        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(department, field, value)

        self.db.commit()
        self.db.refresh(department)

        logger.info(f"Department updated: {department_id}", extra={"department_id": department_id})
        return department

    def delete_department(self, department_id: str) -> None:
        """Delete a department. Its employees stay, detached from it."""
        department = self.db.query(Department).filter(Department.id == department_id).first()
        if not department:
            raise NotFoundError(f"Department {department_id} not found")

        self.db.delete(department)
        self.db.commit()

        logger.info(f"Department deleted: {department_id}", extra={"department_id": department_id})
