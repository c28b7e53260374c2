"""
Database configuration and session management
Used by the SQL store when DATABASE_URL (or POSTGRES_URL) is configured;
otherwise the JSON file store is used and no engine is ever created.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from shared.utils import config, setup_logging

logger = setup_logging("database")

Base = declarative_base()


def build_database_url(database_url: str | None = None) -> str | None:
    """
    Resolve the database URL from the argument or configuration.
    Returns None when no database is configured.
    """
    database_url = database_url or config.get("database_url")
    if not database_url:
        return None
    # Convert postgres:// to postgresql:// for SQLAlchemy compatibility
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url


def create_database_engine(database_url: str) -> Engine:
    """Create SQLAlchemy engine with appropriate configuration"""
    try:
        if database_url.startswith("sqlite"):
            engine = create_engine(database_url, connect_args={"check_same_thread": False})
            logger.info("Using SQLite database engine")
        else:
            engine = create_engine(
                database_url,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=3600,
                pool_size=10,
                max_overflow=20,
                echo=config.get("debug", False),
            )
            logger.info("Using PostgreSQL database engine with connection pooling")

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")

        return engine
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database engine: {e}")
        raise


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_database(engine: Engine) -> None:
    """Initialize database tables"""
    # Register the ORM tables on Base.metadata before creating them
    import models.database  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise
