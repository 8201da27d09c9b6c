# backend/app/database/session.py
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session, SQLModel

from backend.app.core import settings


def make_engine(db_url: str = settings.DATABASE_URL) -> Engine:
    if db_url.startswith("sqlite:///"):
        db_path = db_url[len("sqlite:///"):]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(db_url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(db_url, echo=False)


engine = make_engine()


def init_db(bind: Engine = None):
    from backend.app.database import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session(bind: Engine = None) -> Session:
    return Session(bind or engine)
