from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from studytrack.config import settings

# SQLite needs check_same_thread disabled when sessions cross threads
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db():
    """Create all tables"""
    # Import models so they register with Base.metadata
    import studytrack.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
