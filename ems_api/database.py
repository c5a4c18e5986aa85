"""Database configuration and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ems_api.config import settings, uses_default
from ems_api.logger import get_logger
from ems_api.models import Base, User, UserRole

logger = get_logger(__name__)


def make_engine(url: str) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    # Only use check_same_thread for SQLite
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(url, connect_args=connect_args)

    if url.startswith("sqlite"):
        # ON DELETE CASCADE / SET NULL are ignored by SQLite unless enabled
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def seed_admin(db: Session) -> None:
    """Create the default admin account if it does not exist yet."""
    # Imported here: auth imports database for get_db
    from ems_api.auth import hash_password

    if db.query(User).filter(User.email == settings.ADMIN_EMAIL).first():
        return

    db.add(
        User(
            first_name="System",
            last_name="Administrator",
            email=settings.ADMIN_EMAIL,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    db.commit()
    logger.info(f"Seeded admin user {settings.ADMIN_EMAIL}")
    if uses_default("ADMIN_PASSWORD"):
        logger.warning("Seeded admin uses the default ADMIN_PASSWORD; change it before deploying")


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
