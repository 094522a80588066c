from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from studyhub.config import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # SQLite connections are shared between the CLI and its helpers
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db(bind=None):
    """Create all tables"""
    # Models must be imported so they register on Base.metadata
    import studyhub.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
