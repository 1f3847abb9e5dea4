import os
from typing import Any, Dict
from sqlalchemy import create_engine
from sqlmodel import Session


def _get_database_url_from_env_vars():
    DB_SCHEME = os.getenv("DB_SCHEME", "postgresql")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
    DB_HOST = os.getenv("DB_HOST", "db")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "coworkspace")
    return f"{DB_SCHEME}://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


def get_database_url():
    return os.getenv("DATABASE_URL", _get_database_url_from_env_vars())


def get_engine_options(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the given backend"""
    options = {"echo": os.getenv("ENV") not in ("production", "test")}
    if database_url.startswith("sqlite"):
        # Connections are shared across threads
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


DATABASE_URL = get_database_url()

engine = create_engine(DATABASE_URL, **get_engine_options(DATABASE_URL))


def get_db():
    with Session(engine) as session:
        yield session
