"""Database and service dependencies for the Tasks Service.

This module provides dependency injection functions for FastAPI,
including database session management and the domain service factories.

Functions:
    - get_db: Database session factory with automatic cleanup
    - get_task_service: Task mutation service
    - get_task_query_service: Task list query service
    - get_tag_service: Tag management service

Architecture:
    These utilities are shared across all layers and provide clean dependency
    injection for database access. Repositories never hold a session; the
    session is passed to every service call by the router.
"""

import logging
from typing import Generator

from domain.services.tag_service import TagService
from domain.services.task_query_service import TaskQueryService
from domain.services.task_service import TaskService
from infrastructure.repositories.sqlalchemy_tag_repository import (
    SqlAlchemyTagRepository,
)
from infrastructure.repositories.sqlalchemy_task_query_repository import (
    SqlAlchemyTaskQueryRepository,
)
from infrastructure.repositories.sqlalchemy_task_repository import (
    SqlAlchemyTaskRepository,
)
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import DATABASE_URL, LOG_LEVEL, SQL_ECHO

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Database setup
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.

    Example:
        >>> db = next(get_db())
        >>> db.query(TaskORM).count()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_task_service() -> TaskService:
    """Create the task service with its repository dependency.

    Returns:
        TaskService: Configured domain service ready for use.
    """
    return TaskService(SqlAlchemyTaskRepository())


def get_task_query_service() -> TaskQueryService:
    """Create the task query service with its repository dependency.

    Returns:
        TaskQueryService: Configured domain service ready for use.
    """
    return TaskQueryService(SqlAlchemyTaskQueryRepository())


def get_tag_service() -> TagService:
    """Create and configure the tag service with repository dependency.

    This factory function creates the domain service with its repository dependency.
    The session is injected per-request in each endpoint method.

    Returns:
        TagService: Configured domain service ready for use.
    """
    # Infrastructure layer: SQLAlchemy repository (no session stored)
    tag_repository = SqlAlchemyTagRepository()

    # Domain layer: Domain service with business logic
    return TagService(tag_repository)
