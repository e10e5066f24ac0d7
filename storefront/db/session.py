from sqlmodel import SQLModel, create_engine, Session
from storefront.core.config import settings

# check_same_thread is needed for SQLite, remove for PostgreSQL
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=connect_args)

def get_session():
    with Session(engine) as session:
        yield session

def create_db_and_tables(bind=None):
    # Import models so their tables are registered on SQLModel.metadata
    import storefront.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
