import logging
import os

from dotenv import load_dotenv
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)

# Load environment variables from .env file (if it exists)
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./users.db")


def make_engine(url: str = DATABASE_URL, **kwargs):
    # SQLite connections are shared across FastAPI's worker threads
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, **kwargs)


engine = make_engine()


def init_db(bind=None):
    try:
        import models  # noqa: F401  registers the User table
        SQLModel.metadata.create_all(bind or engine)
        logger.info("Database initialized!")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        logger.warning("The application will continue but database operations may fail.")


def get_session():
    with Session(engine) as session:
        yield session
