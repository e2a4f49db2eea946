# patoshub/db.py

import logging

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy import text
from sqlmodel import SQLModel, create_engine, Session, select

from .auth import hash_password
from .data import ADMIN_ACCOUNT
from .models import User

logger = logging.getLogger(__name__)


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Engine = pooled connection set to the database, built once per process."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},  # required for SQLite + FastAPI
        )
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=30,                       # reclaim idle connections
        connect_args={"connect_timeout": 10},  # seconds
    )


def init_db(engine: Engine, admin_password: str) -> None:
    """Create missing tables and seed the default admin account."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")

    with Session(engine) as session:
        admin = session.exec(
            select(User).where(User.username == ADMIN_ACCOUNT["username"])
        ).first()
        if admin is None:
            session.add(User(**ADMIN_ACCOUNT, password_hash=hash_password(admin_password)))
            session.commit()
            logger.info("Default admin user created: %s", ADMIN_ACCOUNT["username"])


# Dependency: one session per request
def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session
