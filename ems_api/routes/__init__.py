from ems_api.routes.auth import router as auth_router
from ems_api.routes.companies import router as companies_router
from ems_api.routes.departments import router as departments_router
from ems_api.routes.employees import router as employees_router
from ems_api.routes.users import router as users_router

__all__ = [
    "auth_router",
    "companies_router",
    "departments_router",
    "employees_router",
    "users_router",
]
