"""
library_service/app/routers/books.py

Endpoints del recurso /api/books. Mismo flujo y mismos resultados que
/api/authors; además, el author_id de un libro debe corresponder a un autor
existente (si no, 400).
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from app import models, schemas
from app.dependencies import get_author_repository, get_book_repository, get_logger, get_mapper
from app.logger import LoggerService
from app.mapper import Mapper
from app.repository import BookRepositoryBase, RepositoryBase
from app.responses import bad_request, created, internal_error, no_content, not_found
from app.validation import ValidationErrors, body_errors, update_errors

router = APIRouter(prefix="/api/books", tags=["books"])


def _check_author(errors: ValidationErrors, book_dto, authors: RepositoryBase[models.Author]) -> ValidationErrors:
    # Solo se consulta la BD si el resto de la petición ya es válido
    if not errors and not authors.exists(book_dto.author_id):
        errors["author_id"] = [f"Author {book_dto.author_id} does not exist."]
    return errors


@router.get("", summary="Get all books", response_model=List[schemas.BookDTO])
def get_books(
    repository: BookRepositoryBase = Depends(get_book_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info("Getting books.")
        books = repository.find_all()
        return mapper.map_many(books, schemas.BookDTO)
    except Exception as ex:
        return internal_error(logger, ex)


@router.get("/{book_id}", summary="Get a book by id", response_model=schemas.BookDTO)
def get_book(
    book_id: int,
    repository: BookRepositoryBase = Depends(get_book_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info(f"Getting book by id. Id: {book_id}")
        book = repository.find_by_id(book_id)
        if book is None:
            logger.log_warn(f"Book with id {book_id} was not found.")
            return not_found("Book not found")
        return mapper.map(book, schemas.BookDTO)
    except Exception as ex:
        return internal_error(logger, ex)


@router.post("", status_code=201, summary="Create a book", response_model=schemas.BookDTO)
def create_book(
    book_dto: Optional[schemas.BookCreateDTO] = Body(default=None),
    repository: BookRepositoryBase = Depends(get_book_repository),
    authors: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    """
    Crea un libro de un autor existente.

    Body esperado:
      { "title": "Notes", "year": 1843, "isbn": null, "summary": null, "author_id": 1 }
    """
    try:
        logger.log_info("Book submission attempted.")
        errors = _check_author(body_errors(book_dto), book_dto, authors)
        if errors:
            logger.log_warn(f"Book submission rejected: {errors}")
            return bad_request(errors)

        book = mapper.map(book_dto, models.Book)
        if not repository.create(book):
            return internal_error(logger, "Book creation failed.")

        logger.log_info(f"Book {book.id} created.")
        return created(f"/api/books/{book.id}", mapper.map(book, schemas.BookDTO))
    except Exception as ex:
        return internal_error(logger, ex)


@router.put("/{book_id}", status_code=204, summary="Update a book")
def update_book(
    book_id: int,
    book_dto: Optional[schemas.BookUpdateDTO] = Body(default=None),
    repository: BookRepositoryBase = Depends(get_book_repository),
    authors: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info(f"Book update attempted. Id: {book_id}")
        errors = _check_author(update_errors(book_id, book_dto), book_dto, authors)
        if errors:
            logger.log_warn(f"Book update rejected: {errors}")
            return bad_request(errors)

        book = mapper.map(book_dto, models.Book)
        if not repository.update(book):
            return internal_error(logger, f"Update of book {book_id} failed.")

        logger.log_info(f"Book {book_id} updated.")
        return no_content()
    except Exception as ex:
        return internal_error(logger, ex)


@router.delete("/{book_id}", status_code=204, summary="Delete a book")
def delete_book(
    book_id: int,
    repository: BookRepositoryBase = Depends(get_book_repository),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info(f"Book delete attempted. Id: {book_id}")
        book = repository.find_by_id(book_id)
        if book is None:
            logger.log_warn(f"Book with id {book_id} was not found.")
            return not_found("Book not found")

        if not repository.delete(book):
            return internal_error(logger, f"Delete of book {book_id} failed.")

        logger.log_info(f"Book {book_id} deleted.")
        return no_content()
    except Exception as ex:
        return internal_error(logger, ex)
