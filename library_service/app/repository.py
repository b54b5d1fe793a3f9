"""
library_service/app/repository.py

Acceso a datos genérico: un único contrato (RepositoryBase) y una única
implementación sobre SQLAlchemy, instanciada por tipo de entidad.

Convención de resultados:
- exists/find_all/find_by_id: la ausencia no es un error (False, [] o None).
- create/update/delete/save: devuelven True/False. False cuando no había nada
  preparado para el commit o este violó una restricción; el motivo concreto solo se registra en
  el LoggerService. Cualquier otro error de la BD (conexión, driver...) se
  propaga como excepción y el handler lo convierte en 500.
"""

from typing import Generic, List, Optional, Protocol, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app import models
from app.logger import LoggerService

T = TypeVar("T")


# Rango de INTEGER/BIGINT con signo: fuera de él ningún id puede existir
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class RepositoryBase(Protocol[T]):
    def exists(self, id: int) -> bool: ...
    def find_all(self) -> List[T]: ...
    def find_by_id(self, id: int) -> Optional[T]: ...
    def create(self, entity: T) -> bool: ...
    def update(self, entity: T) -> bool: ...
    def delete(self, entity: T) -> bool: ...
    def save(self) -> bool: ...


class BookRepositoryBase(RepositoryBase[models.Book], Protocol):
    def find_by_author(self, author_id: int) -> List[models.Book]: ...


class SqlAlchemyRepository(Generic[T]):
    model: Type[T]
    # Opciones de carga aplicadas a todas las lecturas (p.ej. selectinload)
    load_options: Sequence = ()

    def __init__(self, db: Session, logger: LoggerService):
        self.db = db
        self.logger = logger
        # Identidades existentes fusionadas por update() y aún sin commit
        self._merged = set()

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _select(self):
        return select(self.model).options(*self.load_options).order_by(self.model.id)

    def exists(self, id: int) -> bool:
        if not MIN_ID <= id <= MAX_ID:
            return False
        stmt = select(self.model.id).where(self.model.id == id).limit(1)
        return self.db.scalar(stmt) is not None

    def find_all(self) -> List[T]:
        return list(self.db.execute(self._select()).scalars().all())

    def find_by_id(self, id: int) -> Optional[T]:
        if not MIN_ID <= id <= MAX_ID:
            return None
        stmt = self._select().where(self.model.id == id)
        return self.db.execute(stmt).scalars().first()

    def create(self, entity: T) -> bool:
        self.db.add(entity)
        return self.save()

    def update(self, entity: T) -> bool:
        if entity.id is None or not self.exists(entity.id):
            self.logger.log_warn(f"{self.entity_name} {entity.id} does not exist; nothing to update.")
            return False
        # merge no toca la entidad recibida; la identidad fusionada cuenta como cambio aunque los valores coincidan
        self._merged.add(self.db.merge(entity))
        return self.save()

    def delete(self, entity: T) -> bool:
        self.db.delete(entity)
        return self.save()

    def _pending_changes(self) -> int:
        dirty = {obj for obj in self.db.dirty if self.db.is_modified(obj)}
        return len(self.db.new) + len(self.db.deleted) + len(dirty | self._merged)

    def save(self) -> bool:
        changes = self._pending_changes()
        self._merged = set()
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self.logger.log_error(f"Constraint violation while saving {self.entity_name}: {e.orig}")
            return False

        if changes == 0:
            self.logger.log_warn(f"Saving {self.entity_name} committed no changes.")
            return False
        return True


class AuthorRepository(SqlAlchemyRepository[models.Author]):
    model = models.Author
    load_options = (selectinload(models.Author.books),)


class BookRepository(SqlAlchemyRepository[models.Book]):
    model = models.Book

    def find_by_author(self, author_id: int) -> List[models.Book]:
        stmt = self._select().where(models.Book.author_id == author_id)
        return list(self.db.execute(stmt).scalars().all())
