"""Company management service"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ems_api.domain import company_counters
from ems_api.exceptions import ConflictError, NotFoundError
from ems_api.logger import get_logger
from ems_api.models import Company

logger = get_logger(__name__)


class CompanyService:
    """Service for managing companies and their counter cache"""

    def __init__(self, db: Session):
        self.db = db

    def _refresh_counters(self, company: Company) -> None:
        counters = company_counters(company.departments, company.employees)
        company.number_of_departments = counters.number_of_departments
        company.number_of_employees = counters.number_of_employees

    def _name_taken(self, company_name: str) -> bool:
        return (
            self.db.query(Company).filter(Company.company_name == company_name).first()
            is not None
        )

    def create_company(self, company_name: str) -> Company:
        """
        Create a new company.

        Args:
            company_name: Company name (must be unique, exact match)

        Returns:
            The persisted company with zero counters

        Raises:
            ConflictError: If a company with this name already exists
        """
        if self._name_taken(company_name):
            logger.warning(f"Rejected duplicate company name '{company_name}'")
            raise ConflictError(f"Company '{company_name}' already exists")

        company = Company(
            company_name=company_name,
            number_of_departments=0,
            number_of_employees=0,
        )
        self.db.add(company)
        self.db.commit()
        self.db.refresh(company)

        logger.info(f"Company created: {company.id} '{company_name}'", extra={"company_id": company.id})
        return company

    def list_companies(self, search: Optional[str] = None) -> List[Company]:
        """
        List companies, optionally filtered by a name substring.

        Counters of every returned company are recomputed and persisted.
        """
        query = self.db.query(Company)
        if search:
            query = query.filter(Company.company_name.contains(search, autoescape=True))

        companies = query.order_by(Company.created_at).all()
        for company in companies:
            self._refresh_counters(company)
        self.db.commit()

        return companies

    def get_company(self, company_id: str) -> Company:
        """
        Get company by ID, refreshing and persisting its counters.

        Raises:
            NotFoundError: If the company does not exist
        """
        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError(f"Company {company_id} not found")

        self._refresh_counters(company)
        self.db.commit()
        self.db.refresh(company)
        return company

    def update_company(self, company_id: str, changes: Dict[str, Any]) -> Company:
        """
        Merge the provided fields into the company.

        Raises:
            NotFoundError: If the company does not exist
            ConflictError: If the new name belongs to another company
        """
        company = self.get_company(company_id)

        new_name = changes.get("company_name")
        if new_name is not None and new_name != company.company_name and self._name_taken(new_name):
            logger.warning(f"Rejected rename of company {company_id} to '{new_name}'")
            raise ConflictError(f"Company '{new_name}' already exists")

        for field, value in changes.items():
            if value is not None:
                setattr(company, field, value)

        self.db.commit()
        self.db.refresh(company)

        logger.info(f"Company updated: {company_id}", extra={"company_id": company_id})
        return company

    def delete_company(self, company_id: str) -> None:
        """Delete a company together with its departments and employees."""
        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError(f"Company {company_id} not found")

        self.db.delete(company)
        self.db.commit()

        logger.info(f"Company deleted: {company_id}", extra={"company_id": company_id})
