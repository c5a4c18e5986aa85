"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ems_api.config import settings, uses_default
from ems_api.database import SessionLocal, init_db, seed_admin
from ems_api.exceptions import EMSException
from ems_api.logger import get_logger
from ems_api.routes import (
    auth_router,
    companies_router,
    departments_router,
    employees_router,
    users_router,
)
from ems_api.schemas import ErrorResponse, HealthResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and seed the admin account on startup."""
    if uses_default("JWT_SECRET"):
        logger.warning("JWT_SECRET is the development default; set it in the environment")
    init_db()
    if settings.SEED_ADMIN:
        db = SessionLocal()
        try:
            seed_admin(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Employee Management API",
    description=(
        "Manage companies, their departments and employees. "
        "Department and employee counters are refreshed whenever a record is read."
    ),
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EMSException)
async def ems_exception_handler(request: Request, exc: EMSException):
    """Turn domain errors into the standard error body."""
    logger.warning(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"path": request.url.path, "status_code": exc.status_code},
    )
    body = ErrorResponse(detail=exc.message, code=exc.code, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors (storage failures included) and answer 500."""
    logger.error(
        f"Unexpected error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    body = ErrorResponse(
        detail="An unexpected error occurred", code="INTERNAL_ERROR", status_code=500
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


# --- Health Check ---

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health Check",
    description="Check if the API is running and healthy.",
)
async def health_check():
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        timestamp=datetime.now(UTC),
    )


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(companies_router)
app.include_router(departments_router)
app.include_router(employees_router)
