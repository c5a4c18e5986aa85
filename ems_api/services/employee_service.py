"""Employee management service"""
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ems_api.datetime_utils import to_naive_utc, utcnow
from ems_api.domain import days_employed, ensure_company_unchanged, ensure_department_in_company
from ems_api.exceptions import ConflictError, NotFoundError
from ems_api.logger import get_logger
from ems_api.models import Employee, EmployeeStatus
from ems_api.services.company_service import CompanyService
from ems_api.services.department_service import DepartmentService

logger = get_logger(__name__)

# Fields an update may explicitly set to null
NULLABLE_FIELDS = {"department_id", "salary", "hired_on"}


def _as_id(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


class EmployeeService:
    """Service for managing employees"""

    def __init__(self, db: Session):
        self.db = db
        self.companies = CompanyService(db)
        self.departments = DepartmentService(db)

    def _email_owner(self, email: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.email == email).first()

    def create_employee(self, fields: Dict[str, Any]) -> Employee:
        """
        Create an employee.

        Checks run in order: email uniqueness, company, department, then the
        department/company match.

        Raises:
            ConflictError: If the email is already used
            NotFoundError: If the company or department does not exist
            BadRequestError: If the department belongs to another company
        """
        fields = dict(fields)
        company_id = _as_id(fields.pop("company_id"))
        department_id = _as_id(fields.pop("department_id", None))

        if self._email_owner(fields["email"]):
            logger.warning(f"Rejected duplicate employee email {fields['email']}")
            raise ConflictError(f"Email {fields['email']} already exists")

        company = self.companies.get_company(company_id)

        department = None
        if department_id is not None:
            department = self.departments.get_department(department_id)
            ensure_department_in_company(department, company.id)

        now = utcnow()
        employee = Employee(
            company=company,
            department=department,
            **fields,
        )
        if employee.status is None:
            employee.status = EmployeeStatus.PENDING
        employee.hired_on = to_naive_utc(employee.hired_on)
        employee.days_employed = days_employed(employee.hired_on, now)

        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)

        logger.info(
            f"Employee created: {employee.id} in company {company.id}",
            extra={"employee_id": employee.id, "company_id": company.id},
        )
        return employee

    def list_employees(self, search: Optional[str] = None) -> List[Employee]:
        """
        List employees, optionally matching name, email, designation or phone.

        days_employed is recomputed on the returned objects but not persisted.
        """
        query = self.db.query(Employee)
        if search:
            query = query.filter(
                or_(
                    Employee.employee_name.contains(search, autoescape=True),
                    Employee.email.contains(search, autoescape=True),
                    Employee.designation.contains(search, autoescape=True),
                    Employee.mobile_number.contains(search, autoescape=True),
                )
            )

        employees = query.order_by(Employee.created_at).all()
        now = utcnow()
        for employee in employees:
            employee.days_employed = days_employed(employee.hired_on, now)

        return employees

    def get_employee(self, employee_id: str) -> Employee:
        """
        Get employee by ID, recomputing and persisting days_employed.

        Raises:
            NotFoundError: If the employee does not exist
        """
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        employee.days_employed = days_employed(employee.hired_on)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def update_employee(self, employee_id: str, changes: Dict[str, Any]) -> Employee:
        """
        Merge the provided fields into the employee.

        The company cannot be changed here. A new department must belong to
        the employee's current company; department_id=None detaches it.

        Raises:
            NotFoundError: If the employee or the new department does not exist
            ConflictError: If the new email belongs to another employee
            BadRequestError: On a company change or a department of another company
        """
        employee = self.get_employee(employee_id)
        changes = dict(changes)

        new_email = changes.get("email")
        if new_email is not None and new_email != employee.email:
            owner = self._email_owner(new_email)
            if owner is not None and owner.id != employee.id:
                logger.warning(f"Rejected email change of {employee_id} to {new_email}")
                raise ConflictError(f"Email {new_email} already exists")

        ensure_company_unchanged(employee.company_id, _as_id(changes.pop("company_id", None)))

        if "department_id" in changes:
            department_id = _as_id(changes.pop("department_id"))
            if department_id is None:
                employee.department = None
            elif department_id != employee.department_id:
                department = self.departments.get_department(department_id)
                ensure_department_in_company(department, employee.company_id)
                employee.department = department

        if "hired_on" in changes:
            changes["hired_on"] = to_naive_utc(changes["hired_on"])

        for field, value in changes.items():
            if value is None and field not in NULLABLE_FIELDS:
                continue
            setattr(employee, field, value)

        employee.days_employed = days_employed(employee.hired_on)
        self.db.commit()
        self.db.refresh(employee)

        logger.info(f"Employee updated: {employee_id}", extra={"employee_id": employee_id})
        return employee

    def update_status(self, employee_id: str, status: EmployeeStatus) -> Employee:
        """
        Set the employee status.

        Activating an employee without a hire date stamps hired_on with the
        current time, so days_employed starts at 0.
        """
        employee = self.get_employee(employee_id)
        now = utcnow()

        employee.status = status
        if status == EmployeeStatus.ACTIVE and employee.hired_on is None:
            employee.hired_on = now

        employee.days_employed = days_employed(employee.hired_on, now)
        self.db.commit()
        self.db.refresh(employee)

        logger.info(
            f"Employee {employee_id} status set to {status.value}",
            extra={"employee_id": employee_id, "status": status.value},
        )
        return employee

    def delete_employee(self, employee_id: str) -> None:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        self.db.delete(employee)
        self.db.commit()

        logger.info(f"Employee deleted: {employee_id}", extra={"employee_id": employee_id})
