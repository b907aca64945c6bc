import logging

from sqlmodel import Session, SQLModel, create_engine

from storerating.config import DATABASE_URL, DB_ECHO

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=DB_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)


def init_db():
    # Import models so every table is registered on the metadata
    from storerating.api import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


def close_db():
    engine.dispose()
    logger.info("Database engine disposed")


def get_session():
    with Session(engine) as session:
        yield session
