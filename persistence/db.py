from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

import config

Base = declarative_base()


def make_engine(database_url: str = None):
    url = database_url or config.DATABASE_URL
    # For SQLite, check_same_thread=False is required when the store is shared across threads
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind=None):
    # Import models here so they get registered with Base before creating tables
    import persistence.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
