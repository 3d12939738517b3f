from typing import Any, Dict, List, Sequence
from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(create_tables: bool = False):
    """
    Initialize database.

    Imports the models so they are registered on Base.metadata. Tables are
    only created when create_tables is set (AUTO_CREATE_TABLES); otherwise the
    schema is expected to exist already.
    """
    from app.models import company, job, user  # Import models to register them
    if create_tables:
        Base.metadata.create_all(bind=engine)


def placeholder(index: int) -> str:
    """Positional bind marker for parameter number `index` (1-based)."""
    return f":p{index}"


def run_query(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute a parameterized SQL statement and return its rows as dicts.

    Args:
        db: Database session
        sql: Statement text using :p1, :p2, ... markers
        params: Values bound positionally, params[0] to :p1 and so on

    Returns:
        List of row dicts (empty for statements without a result set)
    """
    bind = {f"p{idx}": value for idx, value in enumerate(params, start=1)}
    result = db.execute(text(sql), bind)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
