import os
from collections import Counter

# BD en memoria: se fija antes de importar la app (app.database crea el engine al importarse)
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from app.database import Base, engine
from app.dependencies import get_author_repository, get_book_repository
from app.main import app


class FakeRepository:
    """Repositorio en memoria que cuenta las llamadas a cada operación."""

    def __init__(self, result=True):
        self.items = {}
        self.result = result
        self.calls = Counter()
        self._next_id = 1

    def add(self, entity):
        if entity.id is None:
            entity.id = self._next_id
        self._next_id = max(self._next_id, entity.id + 1)
        self.items[entity.id] = entity
        return entity

    @property
    def total_calls(self):
        return sum(self.calls.values())

    def exists(self, id):
        self.calls["exists"] += 1
        return id in self.items

    def find_all(self):
        self.calls["find_all"] += 1
        return [self.items[key] for key in sorted(self.items)]

    def find_by_id(self, id):
        self.calls["find_by_id"] += 1
        return self.items.get(id)

    def find_by_author(self, author_id):
        self.calls["find_by_author"] += 1
        return [item for item in self.find_all() if item.author_id == author_id]

    def create(self, entity):
        self.calls["create"] += 1
        if not self.result:
            return False
        self.add(entity)
        return True

    def update(self, entity):
        self.calls["update"] += 1
        if not self.result or entity.id not in self.items:
            return False
        self.items[entity.id] = entity
        return True

    def delete(self, entity):
        self.calls["delete"] += 1
        if not self.result:
            return False
        self.items.pop(entity.id, None)
        return True

    def save(self):
        self.calls["save"] += 1
        return self.result


@pytest.fixture(autouse=True)
def clean_state():
    # Esquema limpio por test y sin overrides de dependencias colgando
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def fake_authors():
    repository = FakeRepository()
    app.dependency_overrides[get_author_repository] = lambda: repository
    return repository


@pytest.fixture
def fake_books():
    repository = FakeRepository()
    app.dependency_overrides[get_book_repository] = lambda: repository
    return repository
