from ems_api.services.company_service import CompanyService
from ems_api.services.department_service import DepartmentService
from ems_api.services.employee_service import EmployeeService
from ems_api.services.user_service import UserService

__all__ = ["CompanyService", "DepartmentService", "EmployeeService", "UserService"]
