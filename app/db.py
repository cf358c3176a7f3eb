import os
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from app import config


def make_engine(url: str):
    """Create an engine; SQLite connections may be shared across threads."""
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        connect_args = {
            "check_same_thread": False,
            "timeout": config.SQLITE_BUSY_TIMEOUT,
        }
    return create_engine(url, connect_args=connect_args)


SQLALCHEMY_DATABASE_URL = config.DATABASE_URL
engine = make_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


@contextmanager
def transaction(db: Session):
    """Commit the work done in the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_database():
    url = make_url(SQLALCHEMY_DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        directory = os.path.dirname(url.database)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

    # Register models on the metadata before creating tables
    from app.models import booking, room, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    if config.SEED_DEMO_DATA:
        from app.seed import seed_demo_data

        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


def get_db():
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
