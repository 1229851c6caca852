from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from family_loans.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    # SQLite-specific settings; pool sizing only applies to server databases
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    **(
        {}
        if _is_sqlite
        else {"pool_size": settings.DB_POOL_SIZE, "max_overflow": settings.DB_MAX_OVERFLOW}
    ),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Request-scoped session; services commit, the session is always closed"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that don't exist yet"""
    # Import models so they're registered on Base.metadata
    from family_loans.models import family_member, loan, tenant  # noqa: F401
    from family_loans.models.base import Base

    Base.metadata.create_all(bind=engine)
