# dishcart/data/database.py
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from dishcart.utils.settings import DATABASE_URL


def build_engine(url: str = DATABASE_URL):
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        #sqlite: sesje uzywane z watkow FastAPI
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def ensure_sqlite_dir(url) -> None:
    """Katalog pliku sqlite (np. .tmp/) tworzony przy starcie, nie przy imporcie."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    if parsed.database and parsed.database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(parsed.database)), exist_ok=True)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
