"""
Proveedores para FastAPI Depends.

Los tests los sustituyen con app.dependency_overrides (por ejemplo, un
repositorio en memoria que cuenta llamadas).
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app import models
from app.database import get_db
from app.logger import LoggerService
from app.mapper import Mapper
from app.maps import mapper
from app.repository import AuthorRepository, BookRepository, BookRepositoryBase, RepositoryBase


def get_logger() -> LoggerService:
    return LoggerService()


def get_mapper() -> Mapper:
    return mapper


def get_author_repository(
    db: Session = Depends(get_db),
    logger: LoggerService = Depends(get_logger),
) -> RepositoryBase[models.Author]:
    return AuthorRepository(db, logger)


def get_book_repository(
    db: Session = Depends(get_db),
    logger: LoggerService = Depends(get_logger),
) -> BookRepositoryBase:
    return BookRepository(db, logger)
