"""
Engine and session factory. SQLite connections are shared across the
request threadpool and the scheduler thread.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hiretrack.app.core.config import settings


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


engine = create_engine(settings.database_url, echo=False, connect_args=_connect_args(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
