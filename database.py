# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (Azure SQL via pymssql, SQLite for local dev)
- Session factory for dependency injection
- Connectivity check

Usage:
     from database import get_session, engine

     # In FastAPI routes:
     @app.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
     """
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database.url

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create SQLAlchemy engine
engine = create_engine(
     DATABASE_URL,
     poolclass=QueuePool,
     pool_size=settings.database.pool_size,
     max_overflow=settings.database.max_overflow,
     pool_timeout=settings.database.pool_timeout,
     pool_recycle=settings.database.pool_recycle,  # Recycle connections after 30 minutes
     echo=settings.database.echo,  # Log SQL if SQL_ECHO=true
     connect_args=connect_args,
)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Usage:
          @app.get("/items")
          def get_items(db: Session = Depends(get_session)):
               return db.query(Item).all()

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()



def check_connection(bind=None) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     bind = bind if bind is not None else engine
     try:
          with bind.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except SQLAlchemyError as e:
          logger.error("Database connection failed: %s", e)
          return False
