import logging

import pytest

from app import models
from app.database import SessionLocal
from app.logger import LoggerService
from app.repository import AuthorRepository, BookRepository


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def authors(db):
    return AuthorRepository(db, LoggerService())


@pytest.fixture
def books(db):
    return BookRepository(db, LoggerService())


def test_find_all_on_empty_store_returns_empty_list(authors):
    assert authors.find_all() == []


def test_create_assigns_id_and_find_by_id_returns_it(authors):
    author = models.Author(firstname="Ada", lastname="Lovelace", bio="Pionera")

    assert authors.create(author) is True
    assert author.id is not None
    assert authors.exists(author.id)

    found = authors.find_by_id(author.id)
    assert (found.firstname, found.lastname, found.bio) == ("Ada", "Lovelace", "Pionera")


def test_absent_ids_are_not_errors(authors):
    assert authors.exists(123) is False
    assert authors.find_by_id(123) is None


def test_find_all_is_ordered_by_id(authors):
    for name in ("C", "A", "B"):
        authors.create(models.Author(firstname=name, lastname="X"))

    assert [a.firstname for a in authors.find_all()] == ["C", "A", "B"]


def test_create_with_missing_required_field_returns_false(authors, caplog):
    assert authors.create(models.Author(firstname="Ada")) is False

    assert any(rec.levelno == logging.ERROR and "Constraint violation" in rec.getMessage() for rec in caplog.records)
    assert authors.find_all() == []


def test_update_changes_persisted_row(authors, db):
    author = models.Author(firstname="Ada", lastname="Lovelace")
    authors.create(author)

    assert authors.update(models.Author(id=author.id, firstname="Ada", lastname="King", bio="Condesa")) is True

    db.expire_all()
    found = authors.find_by_id(author.id)
    assert (found.lastname, found.bio) == ("King", "Condesa")


def test_update_of_unknown_identity_returns_false(authors):
    assert authors.update(models.Author(id=404, firstname="No", lastname="Body")) is False


def test_update_with_identical_values_succeeds(authors, caplog):
    author = models.Author(firstname="Ada", lastname="Lovelace", bio=None)
    authors.create(author)

    same = models.Author(id=author.id, firstname="Ada", lastname="Lovelace", bio=None)
    assert authors.update(same) is True
    assert authors.update(models.Author(id=author.id, firstname="Ada", lastname="Lovelace", bio=None)) is True
    assert not any("committed no changes" in rec.getMessage() for rec in caplog.records)


def test_ids_outside_integer_range_are_absent(authors):
    huge = 99999999999999999999

    assert authors.exists(huge) is False
    assert authors.find_by_id(huge) is None
    assert authors.find_by_id(-huge) is None
    assert authors.update(models.Author(id=huge, firstname="No", lastname="Body")) is False


def test_save_with_nothing_staged_returns_false(authors):
    assert authors.save() is False


def test_delete_cascades_to_books(authors, books):
    author = models.Author(firstname="Ada", lastname="Lovelace")
    authors.create(author)
    books.create(models.Book(title="Notes", author_id=author.id))

    assert authors.delete(authors.find_by_id(author.id)) is True

    assert authors.find_all() == []
    assert books.find_all() == []


def test_find_by_author(authors, books):
    ada = models.Author(firstname="Ada", lastname="Lovelace")
    grace = models.Author(firstname="Grace", lastname="Hopper")
    authors.create(ada)
    authors.create(grace)
    books.create(models.Book(title="Notes", author_id=ada.id))
    books.create(models.Book(title="COBOL", author_id=grace.id))

    assert [b.title for b in books.find_by_author(grace.id)] == ["COBOL"]
