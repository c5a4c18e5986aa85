"""
Storage-independent domain rules.

Counter refresh and the cross-entity checks take already-loaded objects and
never touch a session, so they can be exercised without a database.
"""
import math
from datetime import datetime
from typing import Any, NamedTuple, Optional, Sized

from ems_api.datetime_utils import to_naive_utc, utcnow
from ems_api.exceptions import BadRequestError

SECONDS_PER_DAY = 24 * 60 * 60


class CompanyCounters(NamedTuple):
    number_of_departments: int
    number_of_employees: int


def company_counters(departments: Optional[Sized], employees: Optional[Sized]) -> CompanyCounters:
    """Derive a company's counters from its current related collections."""
    return CompanyCounters(
        number_of_departments=len(departments) if departments else 0,
        number_of_employees=len(employees) if employees else 0,
    )


def department_counter(employees: Optional[Sized]) -> int:
    """Derive a department's employee counter from its current employees."""
    return len(employees) if employees else 0


def days_employed(hired_on: Optional[datetime], now: Optional[datetime] = None) -> int:
    """
    Whole days between hire date and now, rounded up.

    Returns 0 when there is no hire date. Any elapsed time, however small,
    counts as a started day; an identical timestamp counts as 0.
    """
    if hired_on is None:
        return 0
    now = to_naive_utc(now) if now is not None else utcnow()
    elapsed = abs((now - to_naive_utc(hired_on)).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def ensure_department_in_company(department: Any, company_id: str) -> None:
    """Raise BadRequestError if the department belongs to another company."""
    if department.company_id != company_id:
        raise BadRequestError(
            f"Department {department.id} does not belong to company {company_id}"
        )


def ensure_company_unchanged(current_company_id: str, requested_company_id: Optional[str]) -> None:
    """Raise BadRequestError when asked to move an entity to another company."""
    if requested_company_id is not None and requested_company_id != current_company_id:
        raise BadRequestError("Cannot change the company of an existing record")
