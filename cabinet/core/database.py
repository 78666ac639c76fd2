from sqlalchemy import Column, Integer, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings

Base = declarative_base()


class InsertionOrderMixin:
    """Keeps rows listable in the order they were created."""
    seq = Column(Integer, nullable=False, default=0, index=True)


def create_db_engine(database_url: str) -> Engine:
    """Create an engine with pool settings suited to the database flavour."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
    )


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Database initialization
def init_db(bind: Engine = engine):
    """Initialize database tables."""
    # Models register themselves on Base when imported
    from ..models import user, patient, appointment, transaction  # noqa: F401

    Base.metadata.create_all(bind=bind)
